"""Fetching and reading cluster objects.

The shell only ever reads: :meth:`ResourceManager.list` backs every list
command and :meth:`ResourceManager.read` backs per-object commands such as
``describe`` and ``containers``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

import structlog

from cluster_shell.core.kobj import KObj, ObjType
from cluster_shell.integrations.kubernetes.exceptions import KubernetesValidationError

if TYPE_CHECKING:
    from cluster_shell.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()

# kind -> (API group, namespaced list call, cluster-wide list call)
_LIST_CALLS: dict[ObjType, tuple[str, str | None, str]] = {
    ObjType.POD: ("core_v1", "list_namespaced_pod", "list_pod_for_all_namespaces"),
    ObjType.DEPLOYMENT: (
        "apps_v1",
        "list_namespaced_deployment",
        "list_deployment_for_all_namespaces",
    ),
    ObjType.NODE: ("core_v1", None, "list_node"),
    ObjType.PERSISTENT_VOLUME: ("core_v1", None, "list_persistent_volume"),
    ObjType.NAMESPACE: ("core_v1", None, "list_namespace"),
}

# kind -> (API group, read call)
_READ_CALLS: dict[ObjType, tuple[str, str]] = {
    ObjType.POD: ("core_v1", "read_namespaced_pod"),
    ObjType.DEPLOYMENT: ("apps_v1", "read_namespaced_deployment"),
    ObjType.NODE: ("core_v1", "read_node"),
    ObjType.PERSISTENT_VOLUME: ("core_v1", "read_persistent_volume"),
    ObjType.NAMESPACE: ("core_v1", "read_namespace"),
}


class ResourceManager:
    """Read-only access to the resource kinds the shell lists.

    Calls are retried on connection errors and every API failure is
    translated to the ``KubernetesError`` hierarchy.
    """

    def __init__(self, client: KubernetesClient) -> None:
        self._client = client
        self._log = logger.bind(entity="resources")

    def list(
        self,
        kind: ObjType,
        namespace: str | None = None,
        *,
        label_selector: str | None = None,
        field_selector: str | None = None,
    ) -> list[Any]:
        """List raw objects of ``kind``.

        Args:
            kind: Resource kind to list.
            namespace: Namespace to scope namespaced kinds to; None lists
                across all namespaces. Ignored for cluster-scoped kinds.
            label_selector: Label selector, e.g. ``app=nginx``.
            field_selector: Field selector, e.g. ``spec.nodeName=node-1``.

        Returns:
            The ``items`` of the API list response, in server order.

        Raises:
            KubernetesError: If the API call fails.
        """
        group, namespaced_call, cluster_call = _LIST_CALLS[kind]
        kwargs: dict[str, Any] = {"_request_timeout": self._client.timeout}
        if label_selector:
            kwargs["label_selector"] = label_selector
        if field_selector:
            kwargs["field_selector"] = field_selector
        scoped = namespaced_call is not None and namespace is not None

        self._log.debug(
            "listing_resources",
            kind=str(kind),
            namespace=namespace if scoped else None,
            label_selector=label_selector,
            field_selector=field_selector,
        )

        @self._client.make_retry_decorator()
        def _call() -> Any:
            try:
                api = getattr(self._client, group)
                if scoped:
                    return getattr(api, namespaced_call)(namespace, **kwargs)
                return getattr(api, cluster_call)(**kwargs)
            except Exception as e:
                self._handle_api_error(e, kind.kind_name, None, namespace)

        result = _call()
        items = list(result.items or [])
        self._log.debug("listed_resources", kind=str(kind), count=len(items))
        return items

    def read(self, obj: KObj) -> Any:
        """Read the current state of one object.

        Raises:
            KubernetesError: If the object cannot be read.
        """
        group, call = _READ_CALLS[obj.typ]
        if obj.typ.namespaced and not obj.namespace:
            raise KubernetesValidationError(
                message=f"{obj.describe()} has no namespace", status_code=None
            )
        args = (obj.name, obj.namespace) if obj.typ.namespaced else (obj.name,)

        self._log.debug("reading_resource", object=obj.describe())

        @self._client.make_retry_decorator()
        def _call() -> Any:
            try:
                return getattr(getattr(self._client, group), call)(
                    *args, _request_timeout=self._client.timeout
                )
            except Exception as e:
                self._handle_api_error(e, obj.typ.kind_name, obj.name, obj.namespace)

        return _call()

    def to_dict(self, raw: Any) -> dict[str, Any]:
        """Serialize an SDK object to plain data using API field names."""
        data: dict[str, Any] = self._client.core_v1.api_client.sanitize_for_serialization(raw)
        return data

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        raise self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
