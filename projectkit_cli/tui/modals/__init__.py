from projectkit_cli.tui.modals.exit_modal import ExitConfirmationModal


__all__ = ["ExitConfirmationModal"]
