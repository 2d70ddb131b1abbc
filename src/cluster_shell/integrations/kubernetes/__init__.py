"""Kubernetes integration - API client, configuration and error types."""

from cluster_shell.integrations.kubernetes.client import KubernetesClient
from cluster_shell.integrations.kubernetes.config import (
    ClusterConfig,
    KubernetesClientConfig,
    KubernetesDefaultsConfig,
)
from cluster_shell.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesContextError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

__all__ = [
    "ClusterConfig",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesClientConfig",
    "KubernetesConnectionError",
    "KubernetesContextError",
    "KubernetesDefaultsConfig",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesTimeoutError",
    "KubernetesValidationError",
]
