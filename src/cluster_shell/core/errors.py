"""Shell-level error types.

Transport failures are :class:`~cluster_shell.integrations.kubernetes.exceptions.KubernetesError`;
the types here cover what the shell itself rejects or accumulates.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cluster_shell.core.kobj import KObj


class ShellError(Exception):
    """Base class for errors reported by shell commands."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(ShellError):
    """A request was invalid and was rejected before any side effect.

    Raised for unknown show/sort columns, bad filter patterns, malformed
    range specs and invalid configuration files.
    """


class OperationError(ShellError):
    """Applying a command to one selected object failed."""

    def __init__(
        self,
        obj: KObj,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.obj = obj
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.obj.describe()}: {self.message}"


class MultiOperationError(ShellError):
    """One or more members of a multi-object command failed.

    Raised only after every member was attempted.
    """

    def __init__(self, failures: Sequence[OperationError], attempted: int) -> None:
        self.failures = tuple(failures)
        self.attempted = attempted
        super().__init__(f"{len(self.failures)} of {attempted} operations failed")

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"  {failure}" for failure in self.failures)
        return "\n".join(lines)
