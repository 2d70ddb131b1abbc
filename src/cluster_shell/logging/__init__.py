"""Logging configuration for cluster_shell."""

from cluster_shell.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
