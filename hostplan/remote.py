"""Connection plan types.

A `Remote` is one of three things: a `Bookmark` still to be looked up in the
bookmark store, a `Host` with resolved connection parameters, or `None` when
no remote was given for that slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from hostplan.transfer import ConnectionParams


@dataclass(frozen=True)
class Bookmark:
    name: str
    password: str | None = None


@dataclass(frozen=True)
class Host:
    params: ConnectionParams
    password: str | None = None


Remote = Union[Bookmark, Host, None]


@dataclass(frozen=True)
class ConnectionPlan:
    """Resolved command-line remotes.

    Attributes:
        bridge: Intermediate host to connect through, if any.
        target: Final remote endpoint. None only in pure local mode, in which
            case `bridge` is None too.
        local_dir: Starting directory for the local file browser.
    """

    bridge: Remote = None
    target: Remote = None
    local_dir: Path | None = None

    @property
    def is_local_only(self) -> bool:
        return self.target is None
