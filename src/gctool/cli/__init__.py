"""Command-line interface for gctool."""
