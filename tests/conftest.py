"""Shared pytest fixtures for cluster_shell tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from kubernetes.client import (
    V1Container,
    V1ContainerState,
    V1ContainerStateRunning,
    V1ContainerStateTerminated,
    V1ContainerStateWaiting,
    V1ContainerStatus,
    V1Deployment,
    V1DeploymentSpec,
    V1DeploymentStatus,
    V1DeploymentStrategy,
    V1LabelSelector,
    V1Namespace,
    V1NamespaceStatus,
    V1Node,
    V1NodeAddress,
    V1NodeCondition,
    V1NodeSpec,
    V1NodeStatus,
    V1ObjectMeta,
    V1ObjectReference,
    V1PersistentVolume,
    V1PersistentVolumeSpec,
    V1PersistentVolumeStatus,
    V1Pod,
    V1PodSpec,
    V1PodStatus,
    V1PodTemplateSpec,
)
from typer.testing import CliRunner

from cluster_shell.core.kobj import KObj, ObjType

# Fixed "now" so ages render deterministically
NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


def _meta(
    name: str | None,
    namespace: str | None = None,
    age: timedelta | None = None,
    labels: dict[str, str] | None = None,
) -> V1ObjectMeta:
    return V1ObjectMeta(
        name=name,
        namespace=namespace,
        creation_timestamp=NOW - age if age is not None else None,
        labels=labels,
    )


def build_pod(
    name: str | None = "web-0",
    namespace: str | None = "default",
    *,
    phase: str = "Running",
    age: timedelta | None = timedelta(hours=2),
    restarts: tuple[int, ...] = (0,),
    ready: tuple[bool, ...] | None = None,
    waiting: bool = False,
    node: str | None = None,
    ip: str | None = None,
    labels: dict[str, str] | None = None,
) -> V1Pod:
    """A pod with one container per entry in ``restarts``."""
    ready = ready if ready is not None else tuple(True for _ in restarts)
    names = [f"c{index}" for index in range(len(restarts))]
    if waiting:
        state = V1ContainerState(waiting=V1ContainerStateWaiting(reason="ContainerCreating"))
    else:
        state = V1ContainerState(running=V1ContainerStateRunning(started_at=NOW))
    statuses = [
        V1ContainerStatus(
            name=container,
            image="nginx:1.25",
            image_id="docker-pullable://nginx@sha256:abc",
            ready=is_ready,
            restart_count=count,
            state=state,
            container_id=f"containerd://{container}",
        )
        for container, count, is_ready in zip(names, restarts, ready, strict=True)
    ]
    return V1Pod(
        metadata=_meta(name, namespace, age, labels),
        spec=V1PodSpec(
            containers=[V1Container(name=container, image="nginx:1.25") for container in names],
            node_name=node,
        ),
        status=V1PodStatus(phase=phase, container_statuses=statuses, pod_ip=ip),
    )


def build_terminated_state(exit_code: int = 1) -> V1ContainerState:
    return V1ContainerState(
        terminated=V1ContainerStateTerminated(
            exit_code=exit_code,
            reason="Error",
            message="boom",
            finished_at=NOW - timedelta(minutes=5),
        )
    )


def build_node(
    name: str = "node-1",
    *,
    ready: str = "True",
    unschedulable: bool = False,
    age: timedelta | None = timedelta(days=10),
    labels: dict[str, str] | None = None,
    internal_ip: str | None = "10.0.0.1",
) -> V1Node:
    addresses = [V1NodeAddress(address=internal_ip, type="InternalIP")] if internal_ip else None
    return V1Node(
        metadata=_meta(name, None, age, labels),
        spec=V1NodeSpec(unschedulable=unschedulable),
        status=V1NodeStatus(
            conditions=[V1NodeCondition(type="Ready", status=ready)],
            addresses=addresses,
        ),
    )


def build_volume(
    name: str = "pv-1",
    *,
    capacity: str | None = "10Gi",
    phase: str | None = "Bound",
    access_modes: list[str] | None = None,
    claim: tuple[str, str] | None = ("default", "data"),
    age: timedelta | None = timedelta(days=1),
) -> V1PersistentVolume:
    claim_ref = V1ObjectReference(namespace=claim[0], name=claim[1]) if claim else None
    return V1PersistentVolume(
        metadata=_meta(name, None, age),
        spec=V1PersistentVolumeSpec(
            capacity={"storage": capacity} if capacity else None,
            access_modes=access_modes if access_modes is not None else ["ReadWriteOnce"],
            persistent_volume_reclaim_policy="Delete",
            storage_class_name="standard",
            claim_ref=claim_ref,
            volume_mode="Filesystem",
        ),
        status=V1PersistentVolumeStatus(phase=phase),
    )


def build_deployment(
    name: str = "api",
    namespace: str = "default",
    *,
    replicas: int = 3,
    ready: int | None = 3,
    age: timedelta | None = timedelta(days=3),
) -> V1Deployment:
    return V1Deployment(
        metadata=_meta(name, namespace, age),
        spec=V1DeploymentSpec(
            replicas=replicas,
            selector=V1LabelSelector(match_labels={"app": name}),
            strategy=V1DeploymentStrategy(type="RollingUpdate"),
            template=V1PodTemplateSpec(
                spec=V1PodSpec(containers=[V1Container(name=name, image=f"{name}:1.0")])
            ),
        ),
        status=V1DeploymentStatus(
            ready_replicas=ready,
            updated_replicas=replicas,
            available_replicas=ready,
        ),
    )


def build_namespace(
    name: str = "default",
    *,
    phase: str | None = "Active",
    age: timedelta | None = timedelta(days=30),
) -> V1Namespace:
    return V1Namespace(metadata=_meta(name, None, age), status=V1NamespaceStatus(phase=phase))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_pod() -> Callable[..., V1Pod]:
    return build_pod


@pytest.fixture
def make_node() -> Callable[..., V1Node]:
    return build_node


@pytest.fixture
def make_volume() -> Callable[..., V1PersistentVolume]:
    return build_volume


@pytest.fixture
def make_deployment() -> Callable[..., V1Deployment]:
    return build_deployment


@pytest.fixture
def make_namespace() -> Callable[..., V1Namespace]:
    return build_namespace


@pytest.fixture
def terminated_state() -> Callable[..., V1ContainerState]:
    return build_terminated_state


@pytest.fixture
def pod_objs() -> list[KObj]:
    """Three pods as a listing would select them."""
    return [
        KObj(name=name, namespace="default", typ=ObjType.POD, containers=("c0",))
        for name in ("web-0", "web-1", "db-0")
    ]


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    # Clear any CLUSTER_SHELL_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("CLUSTER_SHELL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def capture_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Fixture to capture log output."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
