"""Core runtime pieces shared by the CLI commands."""
