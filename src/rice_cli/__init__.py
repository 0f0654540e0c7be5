"""Rice CLI - set up the Rice SDK in a project."""

__version__ = "0.2.0"
