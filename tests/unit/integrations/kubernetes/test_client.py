"""Unit tests for Kubernetes client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from urllib3.exceptions import MaxRetryError

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

KUBECONFIG_CONTEXTS = (
    [
        {"name": "kind-dev", "context": {"cluster": "kind", "namespace": "apps"}},
        {"name": "prod", "context": {"cluster": "gke-prod"}},
    ],
    {"name": "kind-dev", "context": {"cluster": "kind", "namespace": "apps"}},
)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientInitialization:
    """Test KubernetesClient initialization."""

    @patch("kubernetes.config")
    def test_init_with_default_config(self, mock_config: MagicMock) -> None:
        """Test client initialization with default config."""
        mock_config.list_kube_config_contexts.return_value = KUBECONFIG_CONTEXTS
        client_config = KubernetesClientConfig()
        client = KubernetesClient(client_config)

        assert client._config == client_config
        assert client._retries == 3
        mock_config.load_kube_config.assert_called_once_with(config_file=None, context=None)
        assert client.get_current_context() == "kind-dev"

    @patch("kubernetes.config")
    def test_init_with_cluster_config(self, mock_config: MagicMock) -> None:
        """Test client initialization with cluster configuration."""
        cluster_cfg = ClusterConfig(
            context="test-context",
            kubeconfig="/path/to/config",
        )
        client_config = KubernetesClientConfig(
            clusters={"test": cluster_cfg},
            active_cluster="test",
        )
        client = KubernetesClient(client_config)

        mock_config.load_kube_config.assert_called_once_with(
            config_file="/path/to/config",
            context="test-context",
        )
        assert client._current_context == "test-context"

    @patch("kubernetes.config")
    def test_init_fallback_to_incluster(self, mock_config: MagicMock) -> None:
        """Test client falls back to in-cluster config."""
        from kubernetes.config import ConfigException

        mock_config.load_kube_config.side_effect = ConfigException("Not found")
        mock_config.load_incluster_config.return_value = None

        client = KubernetesClient(KubernetesClientConfig())

        mock_config.load_incluster_config.assert_called_once()
        assert client._current_context == "in-cluster"

    @patch("kubernetes.config")
    def test_init_connection_error(self, mock_config: MagicMock) -> None:
        """Test client raises KubernetesConnectionError when config loading fails."""
        from kubernetes.config import ConfigException

        mock_config.load_kube_config.side_effect = ConfigException("No config")
        mock_config.load_incluster_config.side_effect = ConfigException("Not in cluster")

        with pytest.raises(KubernetesConnectionError) as exc_info:
            KubernetesClient(KubernetesClientConfig())

        assert "Cannot load Kubernetes configuration" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientAPIProperties:
    """Test KubernetesClient lazy API properties."""

    @patch("kubernetes.config")
    def test_core_v1_lazy_loading(self, mock_config: MagicMock) -> None:
        """Test CoreV1Api is lazily loaded and cached."""
        client = KubernetesClient(KubernetesClientConfig())

        assert client._core_v1 is None

        with patch("kubernetes.client.CoreV1Api") as mock_api:
            first = client.core_v1
            second = client.core_v1
            mock_api.assert_called_once()
            assert first is second

    @patch("kubernetes.config")
    def test_apps_v1_lazy_loading(self, mock_config: MagicMock) -> None:
        """Test AppsV1Api is lazily loaded."""
        client = KubernetesClient(KubernetesClientConfig())

        with patch("kubernetes.client.AppsV1Api") as mock_api:
            _ = client.apps_v1
            mock_api.assert_called_once()


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesClientContexts:
    """Test context listing and switching."""

    @patch("kubernetes.config")
    def test_list_contexts(self, mock_config: MagicMock) -> None:
        mock_config.list_kube_config_contexts.return_value = KUBECONFIG_CONTEXTS
        client = KubernetesClient(KubernetesClientConfig())

        contexts = client.list_contexts()

        assert contexts == [
            {"name": "kind-dev", "cluster": "kind", "namespace": "apps", "active": True},
            {"name": "prod", "cluster": "gke-prod", "namespace": None, "active": False},
        ]

    @patch("kubernetes.config")
    def test_list_contexts_without_kubeconfig(self, mock_config: MagicMock) -> None:
        from kubernetes.config import ConfigException

        client = KubernetesClient(KubernetesClientConfig())
        mock_config.list_kube_config_contexts.side_effect = ConfigException("missing")

        assert client.list_contexts() == []

    @patch("kubernetes.config")
    def test_switch_context(self, mock_config: MagicMock) -> None:
        mock_config.list_kube_config_contexts.return_value = KUBECONFIG_CONTEXTS
        client = KubernetesClient(KubernetesClientConfig())
        with patch("kubernetes.client.CoreV1Api"):
            _ = client.core_v1

        active = client.switch_context("prod")

        assert active == "prod"
        assert client.get_current_context() == "prod"
        assert client._core_v1 is None
        mock_config.load_kube_config.assert_called_with(config_file=None, context="prod")
        assert client.context_namespace() is None

    @patch("kubernetes.config")
    def test_switch_to_named_cluster(self, mock_config: MagicMock) -> None:
        client_config = KubernetesClientConfig(
            clusters={"staging": ClusterConfig(context="gke-staging", kubeconfig="/tmp/kc")}
        )
        client = KubernetesClient(client_config)

        assert client.switch_context("staging") == "gke-staging"
        mock_config.load_kube_config.assert_called_with(
            config_file="/tmp/kc", context="gke-staging"
        )

    @patch("kubernetes.config")
    def test_named_cluster_namespace_and_kubeconfig(self, mock_config: MagicMock) -> None:
        mock_config.list_kube_config_contexts.return_value = (
            [{"name": "gke-staging", "context": {"cluster": "gke", "namespace": "ctx-ns"}}],
            {"name": "gke-staging", "context": {"cluster": "gke", "namespace": "ctx-ns"}},
        )
        client_config = KubernetesClientConfig(
            clusters={
                "staging": ClusterConfig(
                    context="gke-staging", kubeconfig="/tmp/kc", namespace="shop"
                ),
                "bare": ClusterConfig(context="gke-staging", kubeconfig="/tmp/kc"),
            }
        )
        client = KubernetesClient(client_config)

        client.switch_context("staging")
        assert client.context_namespace() == "shop"
        mock_config.list_kube_config_contexts.assert_called_with(config_file="/tmp/kc")

        client.switch_context("bare")
        assert client.context_namespace() == "ctx-ns"

    @patch("kubernetes.config")
    def test_switch_context_failure(self, mock_config: MagicMock) -> None:
        from kubernetes.config import ConfigException

        mock_config.list_kube_config_contexts.return_value = KUBECONFIG_CONTEXTS
        client = KubernetesClient(KubernetesClientConfig())
        mock_config.load_kube_config.side_effect = ConfigException("no such context")

        with pytest.raises(KubernetesContextError, match="Failed to switch") as exc_info:
            client.switch_context("missing")

        assert isinstance(exc_info.value, KubernetesConnectionError)
        assert exc_info.value.context == "missing"
        assert exc_info.value.available == ["kind-dev", "prod"]
        assert client.get_current_context() == "kind-dev"

    @patch("kubernetes.config")
    def test_default_namespace_prefers_config(self, mock_config: MagicMock) -> None:
        mock_config.list_kube_config_contexts.return_value = KUBECONFIG_CONTEXTS

        configured = KubernetesClient(KubernetesClientConfig(namespace="shop"))
        from_context = KubernetesClient(KubernetesClientConfig())

        assert configured.default_namespace == "shop"
        assert from_context.default_namespace == "apps"

    @patch("kubernetes.config")
    def test_context_manager_closes(self, mock_config: MagicMock) -> None:
        with KubernetesClient(KubernetesClientConfig()) as client:
            with patch("kubernetes.client.CoreV1Api"):
                _ = client.core_v1

        assert client._core_v1 is None


@pytest.mark.unit
@pytest.mark.kubernetes
class TestTranslateApiException:
    """Test translate_api_exception."""

    @staticmethod
    def _api_exception(status: int, reason: str = "reason") -> Exception:
        from kubernetes.client import ApiException

        return ApiException(status=status, reason=reason)

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (401, KubernetesAuthError),
            (403, KubernetesAuthError),
            (404, KubernetesNotFoundError),
            (400, KubernetesValidationError),
            (422, KubernetesValidationError),
            (408, KubernetesTimeoutError),
            (504, KubernetesTimeoutError),
        ],
    )
    def test_status_mapping(self, status: int, expected: type[KubernetesError]) -> None:
        error = KubernetesClient.translate_api_exception(self._api_exception(status))

        assert type(error) is expected

    def test_not_found_keeps_resource(self) -> None:
        error = KubernetesClient.translate_api_exception(
            self._api_exception(404), "Pod", "web-0", "default"
        )

        assert str(error).startswith("Pod 'web-0' not found in namespace 'default'")

    def test_other_status_is_base_error(self) -> None:
        error = KubernetesClient.translate_api_exception(self._api_exception(500, "boom"))

        assert type(error) is KubernetesError
        assert error.status_code == 500
        assert error.message == "boom"

    def test_connection_errors(self) -> None:
        original = MaxRetryError(pool=None, url="/api/v1/pods", reason="refused")

        error = KubernetesClient.translate_api_exception(original)

        assert isinstance(error, KubernetesConnectionError)
        assert error.original_error is original

    def test_timeout(self) -> None:
        error = KubernetesClient.translate_api_exception(TimeoutError())

        assert isinstance(error, KubernetesTimeoutError)

    def test_passthrough(self) -> None:
        original = KubernetesNotFoundError()

        assert KubernetesClient.translate_api_exception(original) is original

    def test_unknown_exception(self) -> None:
        error = KubernetesClient.translate_api_exception(RuntimeError("weird"))

        assert type(error) is KubernetesError
        assert error.message == "weird"


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRetryDecorator:
    """Test make_retry_decorator."""

    @patch("kubernetes.config")
    def test_retries_connection_errors(self, mock_config: MagicMock) -> None:
        client = KubernetesClient(
            KubernetesClientConfig(defaults=KubernetesDefaultsConfig(retry_attempts=2))
        )
        calls = MagicMock(side_effect=[KubernetesConnectionError(), "ok"])

        with patch("tenacity.nap.time.sleep"):
            result = client.make_retry_decorator()(lambda: calls())()

        assert result == "ok"
        assert calls.call_count == 2

    @patch("kubernetes.config")
    def test_does_not_retry_other_errors(self, mock_config: MagicMock) -> None:
        client = KubernetesClient(KubernetesClientConfig())
        calls = MagicMock(side_effect=KubernetesNotFoundError())

        with pytest.raises(KubernetesNotFoundError):
            client.make_retry_decorator()(lambda: calls())()

        assert calls.call_count == 1

    @patch("kubernetes.config")
    def test_timeout_property(self, mock_config: MagicMock) -> None:
        client = KubernetesClient(
            KubernetesClientConfig(defaults=KubernetesDefaultsConfig(timeout=7))
        )

        assert client.timeout == 7
