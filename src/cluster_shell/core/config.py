"""Shell configuration loaded from ``~/.cluster-shell.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from cluster_shell.core.errors import ConfigError
from cluster_shell.core.ranges import DEFAULT_SEPARATOR
from cluster_shell.integrations.kubernetes.config import KubernetesClientConfig

DEFAULT_CONFIG_PATH = Path.home() / ".cluster-shell.yaml"
DEFAULT_HISTORY_FILE = Path.home() / ".local" / "state" / "cluster-shell" / "history"


class ShellConfig(BaseModel):
    """Settings for the interactive shell."""

    model_config = ConfigDict(extra="forbid")

    range_separator: str = DEFAULT_SEPARATOR
    history_file: str = str(DEFAULT_HISTORY_FILE)
    kubernetes: KubernetesClientConfig = KubernetesClientConfig()

    @field_validator("range_separator")
    @classmethod
    def validate_range_separator(cls, v: str) -> str:
        """The separator cannot collide with digits or the '-' range marker."""
        if not v or v.isspace() or any(ch.isdigit() or ch == "-" for ch in v):
            raise ValueError("range_separator must be non-blank and contain no digits or '-'")
        return v

    @field_validator("history_file")
    @classmethod
    def validate_history_file(cls, v: str) -> str:
        """Expand ~ in the history path."""
        return str(Path(v).expanduser())


def load_config(path: Path | None = None) -> ShellConfig:
    """Load the shell configuration, applying environment overrides.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        data = loaded

    try:
        kubernetes = KubernetesClientConfig.from_env(data.pop("kubernetes", None))
        return ShellConfig.model_validate({**data, "kubernetes": kubernetes})
    except ValueError as e:
        raise ConfigError(f"invalid configuration in {config_path}: {e}") from e
