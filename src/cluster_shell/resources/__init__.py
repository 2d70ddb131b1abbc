"""Resource kinds the shell can list.

Each module defines its columns, extractors and identity mapping as a
:class:`ResourceDefinition`; :func:`build_registry` collects the extractors
into the registry the environment holds.
"""

from __future__ import annotations

from cluster_shell.core.extractors import ExtractorRegistry
from cluster_shell.resources import deployments, namespaces, nodes, pods, volumes
from cluster_shell.resources.base import ResourceDefinition

RESOURCES: tuple[ResourceDefinition, ...] = (
    pods.DEFINITION,
    nodes.DEFINITION,
    deployments.DEFINITION,
    volumes.DEFINITION,
    namespaces.DEFINITION,
)


def build_registry(definitions: tuple[ResourceDefinition, ...] = RESOURCES) -> ExtractorRegistry:
    """Build the extractor registry for ``definitions``."""
    return ExtractorRegistry({definition.kind: definition.extractors for definition in definitions})


def get_definition(name: str) -> ResourceDefinition | None:
    """Look up a definition by command name, alias or kind."""
    for definition in RESOURCES:
        if name in definition.names or name == definition.kind:
            return definition
    return None


__all__ = [
    "RESOURCES",
    "ResourceDefinition",
    "build_registry",
    "get_definition",
]
