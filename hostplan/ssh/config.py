"""Paramiko-backed reader for the user's OpenSSH client configuration.

Host blocks are exposed as `SshHostEntry` values, in file order, with their
pattern lists kept verbatim (negated patterns flagged). Only the fields a
connection plan needs are extracted: HostName, Port and User.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import paramiko
from paramiko.ssh_exception import ConfigParseError

from hostplan.errors import SshConfigUnreadable


@dataclass(frozen=True)
class SshHostPattern:
    text: str
    negated: bool = False

    @classmethod
    def parse(cls, raw: str) -> "SshHostPattern":
        if raw.startswith("!"):
            return cls(raw[1:], negated=True)
        return cls(raw)


@dataclass(frozen=True)
class SshHostEntry:
    """One `Host` block of an SSH client configuration."""

    patterns: list[SshHostPattern] = field(default_factory=list)
    host_name: str | None = None
    port: int | None = None
    user: str | None = None

    def matches_exactly(self, alias: str) -> bool:
        """Return True if a non-negated pattern is literally `alias`.

        Wildcards are not expanded: "web-*" only matches the alias "web-*".
        """
        return any(not p.negated and p.text == alias for p in self.patterns)


def default_ssh_config_path() -> Path:
    """Return the per-user OpenSSH client configuration path."""
    return Path.home() / ".ssh" / "config"


def _parse_port(raw: str | None, patterns: list[str]) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise SshConfigUnreadable(
            f"invalid Port '{raw}' for Host {' '.join(patterns)}"
        ) from None


def load_ssh_config(path: str | Path) -> list[SshHostEntry]:
    """Read and parse an SSH client configuration file.

    Args:
        path: Location of the configuration file, usually
            `default_ssh_config_path()`.

    Returns:
        Host entries in file order. `Match` blocks are skipped.

    Raises:
        SshConfigUnreadable: If the file is missing, unreadable or malformed.
    """
    path = Path(path).expanduser()
    try:
        config = paramiko.SSHConfig.from_path(str(path))
    except OSError as e:
        raise SshConfigUnreadable(f"{path}: {e.strerror or e}") from e
    except ConfigParseError as e:
        raise SshConfigUnreadable(f"{path}: {e}") from e

    entries: list[SshHostEntry] = []
    # paramiko keeps parsed blocks on a private list; it has no public iterator
    for block in config._config:
        raw_patterns: list[str] = block.get("host") or []
        if not raw_patterns:
            continue
        options = block.get("config", {})
        entries.append(
            SshHostEntry(
                patterns=[SshHostPattern.parse(p) for p in raw_patterns],
                host_name=options.get("hostname"),
                port=_parse_port(options.get("port"), raw_patterns),
                user=options.get("user"),
            )
        )
    return entries


def find_host(entries: list[SshHostEntry], alias: str) -> SshHostEntry | None:
    """Return the first entry whose patterns name `alias` exactly, or None."""
    for entry in entries:
        if entry.matches_exactly(alias):
            return entry
    return None
