"""ProjectKit CLI - terminal wizards for team project workflows."""

__version__ = "0.3.0"
