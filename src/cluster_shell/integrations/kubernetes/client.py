"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with context switching, lazy API
group initialization, retry logic and consistent error translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from cluster_shell.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesContextError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import AppsV1Api, CoreV1Api

    from cluster_shell.integrations.kubernetes.config import KubernetesClientConfig

logger = structlog.get_logger()


class KubernetesClient:
    """Kubernetes API client bound to one kubeconfig context at a time.

    Example:
        ```python
        from cluster_shell.integrations.kubernetes import (
            KubernetesClient,
            KubernetesClientConfig,
        )

        with KubernetesClient(KubernetesClientConfig.from_env()) as client:
            pods = client.core_v1.list_pod_for_all_namespaces()
        ```
    """

    def __init__(self, client_config: KubernetesClientConfig) -> None:
        """Load the kubeconfig and select the configured context.

        Args:
            client_config: Connection configuration.

        Raises:
            KubernetesConnectionError: If neither a kubeconfig nor an
                in-cluster service account can be loaded.
        """
        self._config = client_config
        self._retries = client_config.defaults.retry_attempts
        self._current_context: str | None = None
        self._kubeconfig = client_config.get_kubeconfig()
        self._cluster_namespace: str | None = None

        self._core_v1: CoreV1Api | None = None
        self._apps_v1: AppsV1Api | None = None

        self._load_config()

        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            namespace=client_config.get_active_namespace(),
        )

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        active_context = self._config.get_active_context()
        kubeconfig_path = self._kubeconfig

        try:
            config.load_kube_config(
                config_file=kubeconfig_path,
                context=active_context,
            )
            self._current_context = active_context or self._kubeconfig_current_context()
            logger.debug(
                "loaded_kubeconfig",
                context=self._current_context,
                kubeconfig=kubeconfig_path,
            )
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e

        self._invalidate_api_cache()

    def _kubeconfig_current_context(self) -> str | None:
        from kubernetes import config

        try:
            _, active = config.list_kube_config_contexts(
                config_file=self._kubeconfig
            )
        except Exception:
            return None
        return active.get("name") if active else None

    def _invalidate_api_cache(self) -> None:
        self._core_v1 = None
        self._apps_v1 = None

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """CoreV1Api instance (pods, nodes, namespaces, persistent volumes)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api()
        return self._core_v1

    @property
    def apps_v1(self) -> AppsV1Api:
        """AppsV1Api instance (deployments)."""
        if self._apps_v1 is None:
            from kubernetes.client import AppsV1Api

            self._apps_v1 = AppsV1Api()
        return self._apps_v1

    # =========================================================================
    # Context Management
    # =========================================================================

    def switch_context(self, context_name: str) -> str:
        """Switch to a different kubeconfig context.

        Args:
            context_name: A kubeconfig context name or a named cluster from
                the shell config.

        Returns:
            The kubeconfig context that is now active.

        Raises:
            KubernetesContextError: If the context cannot be loaded.
        """
        from kubernetes import config
        from kubernetes.config import ConfigException

        kubeconfig_path = self._config.get_kubeconfig(context_name)
        cluster = self._config.clusters.get(context_name)
        if cluster:
            context_name = cluster.context or context_name

        try:
            config.load_kube_config(
                config_file=kubeconfig_path,
                context=context_name,
            )
        except ConfigException as e:
            raise KubernetesContextError(
                context_name,
                available=[ctx["name"] for ctx in self.list_contexts()],
                original_error=e,
            ) from e

        self._current_context = context_name
        self._kubeconfig = kubeconfig_path
        self._cluster_namespace = cluster.namespace if cluster else None
        self._invalidate_api_cache()
        logger.info("switched_context", context=context_name, kubeconfig=kubeconfig_path)
        return context_name

    def get_current_context(self) -> str:
        """Current context name, 'in-cluster' inside a pod, or 'unknown'."""
        return self._current_context or "unknown"

    def list_contexts(self) -> list[dict[str, Any]]:
        """List all contexts in the kubeconfig.

        Returns:
            Dictionaries with 'name', 'cluster', 'namespace' and 'active' keys.
        """
        from kubernetes import config

        try:
            contexts, active = config.list_kube_config_contexts(
                config_file=self._kubeconfig
            )
        except Exception:
            return []

        result = []
        for ctx in contexts:
            ctx_info = ctx.get("context", {})
            result.append(
                {
                    "name": ctx.get("name", ""),
                    "cluster": ctx_info.get("cluster", ""),
                    "namespace": ctx_info.get("namespace"),
                    "active": ctx.get("name") == self._current_context,
                }
            )
        return result

    def context_namespace(self) -> str | None:
        """Namespace for the current context.

        A named cluster switched to with :meth:`switch_context` supplies its own
        namespace; otherwise the kubeconfig context's namespace is used.
        """
        if self._cluster_namespace:
            return self._cluster_namespace
        for ctx in self.list_contexts():
            if ctx["name"] == self._current_context:
                namespace: str | None = ctx["namespace"]
                return namespace
        return None

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate an exception raised by the kubernetes client.

        Args:
            e: The original exception (typically an ApiException).
            resource_type: Kind of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e

        if isinstance(e, (Urllib3HTTPError, ConnectionError)):
            return KubernetesConnectionError(
                message=f"Cannot reach the Kubernetes API server: {e}",
                original_error=e,
            )

        if isinstance(e, TimeoutError):
            return KubernetesTimeoutError(message=str(e) or "Kubernetes request timed out")

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=e.reason or "Validation failed",
                status_code=status,
            )

        if status in (408, 504):
            return KubernetesTimeoutError(
                message=e.reason or "Kubernetes request timed out",
                status_code=status,
            )

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Retry Decorator
    # =========================================================================

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for transient connection errors.

        Returns:
            A tenacity retry decorator configured with exponential backoff.
        """
        return retry(
            retry=retry_if_exception_type(KubernetesConnectionError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def default_namespace(self) -> str | None:
        """Namespace to start in: configured value, else the context's own."""
        return self._config.get_active_namespace() or self.context_namespace()

    @property
    def timeout(self) -> int:
        """Request timeout in seconds."""
        return self._config.defaults.timeout

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        self._invalidate_api_cache()
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
