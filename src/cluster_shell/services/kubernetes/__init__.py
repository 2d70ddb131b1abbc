"""Kubernetes resource access for shell commands."""

from cluster_shell.services.kubernetes.resource_manager import ResourceManager

__all__ = ["ResourceManager"]
