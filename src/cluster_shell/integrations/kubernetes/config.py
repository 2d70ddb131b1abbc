"""Kubernetes connection configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ClusterConfig(BaseModel):
    """A named cluster: a kubeconfig context plus shell defaults for it."""

    model_config = ConfigDict(extra="forbid")

    context: str = ""
    kubeconfig: str | None = None
    namespace: str | None = None

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser()) if v else None


class KubernetesDefaultsConfig(BaseModel):
    """Request defaults for API calls."""

    model_config = ConfigDict(extra="forbid")

    timeout: int = 30
    retry_attempts: int = 3

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is at least one attempt."""
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v


class KubernetesClientConfig(BaseModel):
    """Everything the shell needs to open a connection to a cluster."""

    model_config = ConfigDict(extra="forbid")

    clusters: dict[str, ClusterConfig] = {}
    active_cluster: str | None = None
    kubeconfig: str | None = None
    namespace: str | None = None
    defaults: KubernetesDefaultsConfig = KubernetesDefaultsConfig()

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser()) if v else None

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KubernetesClientConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            CLUSTER_SHELL_CONTEXT: Context (or named cluster) to start in
            CLUSTER_SHELL_NAMESPACE: Namespace to start in
            CLUSTER_SHELL_KUBECONFIG: Kubeconfig path
            CLUSTER_SHELL_TIMEOUT: Request timeout in seconds
        """
        config_dict = dict(base_config) if base_config else {}
        config_dict["defaults"] = dict(config_dict.get("defaults") or {})

        if context := os.environ.get("CLUSTER_SHELL_CONTEXT"):
            config_dict["active_cluster"] = context
        if namespace := os.environ.get("CLUSTER_SHELL_NAMESPACE"):
            config_dict["namespace"] = namespace
        if kubeconfig := os.environ.get("CLUSTER_SHELL_KUBECONFIG"):
            config_dict["kubeconfig"] = kubeconfig
        if timeout := os.environ.get("CLUSTER_SHELL_TIMEOUT"):
            config_dict["defaults"]["timeout"] = int(timeout)

        return cls.model_validate(config_dict)

    def get_active_context(self) -> str | None:
        """Resolve the kubeconfig context to load.

        A named cluster maps to its configured context; any other value is
        treated as a raw kubeconfig context name. None means the kubeconfig's
        current context.
        """
        if self.active_cluster:
            if cluster := self.clusters.get(self.active_cluster):
                return cluster.context or None
            return self.active_cluster
        return None

    def get_kubeconfig(self, name: str | None = None) -> str | None:
        """Kubeconfig path for a named cluster, falling back to the global one."""
        cluster = self.clusters.get(name or self.active_cluster or "")
        if cluster and cluster.kubeconfig:
            return cluster.kubeconfig
        return self.kubeconfig

    def get_active_namespace(self) -> str | None:
        """Namespace the shell starts in; None means all namespaces."""
        if self.namespace:
            return self.namespace
        cluster = self.clusters.get(self.active_cluster or "")
        return cluster.namespace if cluster else None
