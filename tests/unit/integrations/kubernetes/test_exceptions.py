"""Unit tests for Kubernetes exceptions."""

from __future__ import annotations

import pytest

from cluster_shell.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesContextError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestKubernetesError:
    """Tests for the base error."""

    def test_message_only(self) -> None:
        assert str(KubernetesError("boom")) == "boom"

    def test_full_context(self) -> None:
        error = KubernetesError(
            "forbidden",
            status_code=403,
            resource_type="Pod",
            resource_name="web-0",
            namespace="shop",
        )

        assert str(error) == "forbidden (status: 403) [Pod/web-0 in shop]"

    @pytest.mark.parametrize(
        "error_type",
        [
            KubernetesAuthError,
            KubernetesConnectionError,
            KubernetesNotFoundError,
            KubernetesTimeoutError,
            KubernetesValidationError,
        ],
    )
    def test_subclasses(self, error_type: type[KubernetesError]) -> None:
        assert isinstance(error_type(), KubernetesError)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestSubclasses:
    """Tests for the specific error types."""

    def test_connection_keeps_original(self) -> None:
        original = OSError("refused")
        error = KubernetesConnectionError(original_error=original)

        assert error.original_error is original
        assert error.status_code is None

    def test_auth_defaults(self) -> None:
        error = KubernetesAuthError(reason="Unauthorized")

        assert error.status_code == 401
        assert error.reason == "Unauthorized"

    def test_not_found_message(self) -> None:
        error = KubernetesNotFoundError(resource_type="Node", resource_name="node-9")

        assert error.message == "Node 'node-9' not found"
        assert error.status_code == 404

    def test_not_found_default_message(self) -> None:
        assert KubernetesNotFoundError().message == "Kubernetes resource not found"

    def test_timeout_mentions_seconds(self) -> None:
        error = KubernetesTimeoutError(timeout_seconds=30)

        assert error.message == "Kubernetes request timed out (after 30s)"
        assert error.timeout_seconds == 30

    def test_validation_status(self) -> None:
        assert KubernetesValidationError().status_code == 422

    def test_context_error(self) -> None:
        error = KubernetesContextError("prod", available=["kind-dev"])

        assert isinstance(error, KubernetesConnectionError)
        assert error.message == "Failed to switch to context 'prod'"
        assert error.available == ["kind-dev"]
        assert KubernetesContextError("prod").available == []
