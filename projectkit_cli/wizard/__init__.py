"""Multi-step input wizard: step runner and surface protocols."""

from projectkit_cli.wizard.step_runner import NavigationSignal, Step, StepRunner
from projectkit_cli.wizard.surfaces import (
    InputBox,
    QuickInput,
    QuickInputButton,
    QuickInputButtons,
    QuickInputHost,
    QuickPick,
    QuickPickItem,
)


__all__ = [
    # Runner
    "StepRunner",
    "Step",
    "NavigationSignal",
    # Surfaces
    "QuickInput",
    "QuickPick",
    "InputBox",
    "QuickInputHost",
    "QuickInputButton",
    "QuickInputButtons",
    "QuickPickItem",
]
