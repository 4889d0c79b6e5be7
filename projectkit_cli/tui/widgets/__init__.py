from projectkit_cli.tui.widgets.progress_notice import ProgressNotice


__all__ = ["ProgressNotice"]
