"""Command-line entry point and interactive shell."""
