"""Configuration loader for hostplan settings.

Reads an optional YAML file holding the SSH config location, the default
protocol for bare addresses and the weave project used for tracing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Union

import yaml

from hostplan.ssh import default_ssh_config_path
from hostplan.transfer import FileTransferProtocol

from .schema import SchemaError, validate_config_schema


def default_config_path() -> Path:
    """Return the per-user settings file location."""
    return Path.home() / ".config" / "hostplan" / "config.yaml"


class ConfigManager:
    """Manage access to the settings defined in a YAML file.

    Args:
        config_path: Path to the YAML settings file. When None, the per-user
            default is used and may be absent.
        required: Whether a missing file is an error. Explicitly chosen
            files are usually required.
    """

    def __init__(self, config_path: Union[str, Path, None] = None, *, required: bool = False):
        self.config_path = Path(config_path).expanduser() if config_path else default_config_path()
        self.required = required
        self.raw: dict[str, Any] = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load and validate the YAML settings file.

        Returns:
            The settings mapping; empty when the file is absent and optional.

        Raises:
            SchemaError: If the file is required but missing, is not valid
                YAML, cannot be read, or fails schema validation.
        """
        if not os.path.isfile(self.config_path):
            if self.required:
                raise SchemaError(f"Configuration file not found: {self.config_path}")
            return {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise SchemaError(f"Cannot read {self.config_path}: {e.strerror or e}") from e
        except yaml.YAMLError as e:
            raise SchemaError(f"Invalid YAML in {self.config_path}: {e}") from e
        validate_config_schema(data)
        return data or {}

    @property
    def default_protocol(self) -> FileTransferProtocol:
        name = self.raw.get("default_protocol")
        if name is None:
            return FileTransferProtocol.SFTP
        return FileTransferProtocol.from_name(name)

    @property
    def weave_project(self) -> str | None:
        return self.raw.get("weave_project")

    def ssh_config_path(self, override: Union[str, Path, None] = None) -> Path:
        """Return the SSH client config to read aliases from.

        `override` (from a flag or the environment) wins over the YAML
        `ssh_config` key, which wins over `~/.ssh/config`.
        """
        chosen = override or self.raw.get("ssh_config")
        if chosen:
            return Path(chosen).expanduser()
        return default_ssh_config_path()
