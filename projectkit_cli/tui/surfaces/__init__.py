from projectkit_cli.tui.surfaces.base import QuickInputScreen, TextualQuickInput
from projectkit_cli.tui.surfaces.input_box import InputBoxScreen, TextualInputBox
from projectkit_cli.tui.surfaces.quick_pick import QuickPickScreen, TextualQuickPick


__all__ = [
    "InputBoxScreen",
    "QuickInputScreen",
    "QuickPickScreen",
    "TextualInputBox",
    "TextualQuickInput",
    "TextualQuickPick",
]
