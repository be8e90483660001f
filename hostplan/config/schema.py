"""Schema validation for the YAML settings file.

Every key is optional:

    ssh_config: ~/.ssh/config       # SSH client config used for aliases
    default_protocol: sftp          # protocol for addresses without "proto://"
    weave_project: my-team/hostplan # enable weave tracing

An empty file is valid and means "all defaults".
"""

from __future__ import annotations

from typing import Any

from hostplan.transfer import FileTransferProtocol

KNOWN_KEYS = ("ssh_config", "default_protocol", "weave_project")


class SchemaError(ValueError):
    """Raised when the YAML configuration structure is invalid."""


def _check_optional_str(data: dict[str, Any], key: str) -> None:
    value = data.get(key)
    if value is None:
        return
    if not isinstance(value, str) or not value.strip():
        raise SchemaError(f"'{key}' must be a non-empty string if provided")


def validate_config_schema(data: Any) -> None:
    """Validate the settings mapping loaded from YAML.

    Checks:
    - the document is a mapping (or empty)
    - no keys besides ssh_config, default_protocol, weave_project
    - ssh_config and weave_project are non-empty strings
    - default_protocol names a supported protocol

    Raises:
        SchemaError: on structural issues; the message contains human-friendly details.
    """
    if data is None:
        return
    if not isinstance(data, dict):
        raise SchemaError("Top-level YAML must be a mapping/object")

    unknown = sorted(str(k) for k in data if k not in KNOWN_KEYS)
    if unknown:
        raise SchemaError(f"Unknown setting(s): {', '.join(unknown)}")

    _check_optional_str(data, "ssh_config")
    _check_optional_str(data, "weave_project")

    protocol = data.get("default_protocol")
    if protocol is not None:
        if not isinstance(protocol, str):
            raise SchemaError("'default_protocol' must be a string if provided")
        try:
            FileTransferProtocol.from_name(protocol)
        except ValueError as e:
            raise SchemaError(f"'default_protocol': {e}") from None
