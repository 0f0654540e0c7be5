"""Command line interface for Rice setup."""
