"""Type-erased identity of a listed cluster object."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

UNKNOWN_NAME = "<Unknown>"


class ObjType(StrEnum):
    """Closed set of resource kinds the shell can list and select."""

    POD = "pod"
    NODE = "node"
    PERSISTENT_VOLUME = "persistentvolume"
    DEPLOYMENT = "deployment"
    NAMESPACE = "namespace"

    @property
    def kind_name(self) -> str:
        return _TITLES[self]

    @property
    def namespaced(self) -> bool:
        return self in (ObjType.POD, ObjType.DEPLOYMENT)


_TITLES = {
    ObjType.POD: "Pod",
    ObjType.NODE: "Node",
    ObjType.PERSISTENT_VOLUME: "PersistentVolume",
    ObjType.DEPLOYMENT: "Deployment",
    ObjType.NAMESPACE: "Namespace",
}


class KObj(BaseModel):
    """Name, namespace and kind of one object, independent of its API type.

    ``containers`` is the pod sidecar: container names, empty for every
    other kind.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str | None = None
    typ: ObjType
    containers: tuple[str, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: str | None) -> str:
        return v or UNKNOWN_NAME

    def is_type(self, typ: ObjType) -> bool:
        return self.typ is typ

    @property
    def is_pod(self) -> bool:
        return self.typ is ObjType.POD

    def describe(self) -> str:
        """Short human label, e.g. ``Pod default/web-0``."""
        if self.namespace:
            return f"{self.typ.kind_name} {self.namespace}/{self.name}"
        return f"{self.typ.kind_name} {self.name}"
