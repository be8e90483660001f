"""Resolve command-line remotes into a `ConnectionPlan`.

The CLI hands over three already-separated lists (bookmark names, SSH-config
aliases, free positional tokens) and a flat list of passwords. Resolution
works on their concatenation in that fixed order:

1. more than three tokens is an error;
2. the last token is taken as the local directory if it names an existing
   filesystem entry, whatever list it came from;
3. every other token becomes a `Bookmark` or a `Host`;
4. one remote is the target; with two, the first is the target and the
   second the bridge.

Passwords pair with tokens by position in the concatenation, so the first
password belongs to the first token even when that token is a bookmark.

Note: step 2 depends on what exists on disk at call time. A bookmark named
"backup" given last resolves to a local directory if ./backup exists.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

import weave

from hostplan.errors import (
    BadAddress,
    SshHostNotFound,
    TooManyArguments,
)
from hostplan.remote import Bookmark, ConnectionPlan, Host, Remote
from hostplan.ssh import SshHostEntry, find_host, load_ssh_config
from hostplan.transfer import (
    AddressParseError,
    ConnectionParams,
    FileTransferProtocol,
    parse_address,
)
from hostplan.utils.masking import mask_trace_inputs
from hostplan.utils.types import describe_plan

MAX_HOST_ARGS = 3
DEFAULT_SSH_PORT = 22


class ArgKind(Enum):
    ADDRESS = "address"
    BOOKMARK = "bookmark"
    SSH_ALIAS = "ssh_alias"


@dataclass(frozen=True)
class RawHostArg:
    kind: ArgKind
    text: str
    password: str | None
    is_last: bool


def classify_args(
    bookmarks: Sequence[str],
    ssh_aliases: Sequence[str],
    positionals: Sequence[str],
    passwords: Sequence[str],
) -> list[RawHostArg]:
    """Concatenate the three argument lists and pair them with passwords.

    Raises:
        TooManyArguments: If more than three tokens were given in total.
    """
    tagged = (
        [(ArgKind.BOOKMARK, t) for t in bookmarks]
        + [(ArgKind.SSH_ALIAS, t) for t in ssh_aliases]
        + [(ArgKind.ADDRESS, t) for t in positionals]
    )
    if len(tagged) > MAX_HOST_ARGS:
        raise TooManyArguments()

    last_index = max(len(tagged) - 1, 0)
    return [
        RawHostArg(
            kind=kind,
            text=text,
            password=passwords[i] if i < len(passwords) else None,
            is_last=i == last_index,
        )
        for i, (kind, text) in enumerate(tagged)
    ]


def split_ssh_alias(token: str) -> tuple[str, str | None]:
    """Split "alias[:remote_path]" at the first colon.

    An empty path ("alias:") counts as no path.
    """
    alias, sep, path = token.partition(":")
    return alias, (path or None) if sep else None


class _SshConfigCache:
    """Loads the SSH config on first use so a call reads the file at most once."""

    def __init__(self, path: Path):
        self.path = path
        self._entries: list[SshHostEntry] | None = None

    def entries(self) -> list[SshHostEntry]:
        if self._entries is None:
            self._entries = load_ssh_config(self.path)
        return self._entries


def _params_from_ssh_alias(token: str, ssh_config: _SshConfigCache) -> ConnectionParams:
    alias, remote_path = split_ssh_alias(token)
    entry = find_host(ssh_config.entries(), alias)
    if entry is None:
        raise SshHostNotFound(alias, str(ssh_config.path))
    return ConnectionParams(
        protocol=FileTransferProtocol.SFTP,
        address=entry.host_name or alias,
        port=entry.port if entry.port is not None else DEFAULT_SSH_PORT,
        username=entry.user,
        remote_path=remote_path,
    )


def _resolve_arg(
    arg: RawHostArg,
    ssh_config: _SshConfigCache,
    default_protocol: FileTransferProtocol,
) -> Remote:
    if arg.kind is ArgKind.BOOKMARK:
        return Bookmark(arg.text, arg.password)
    if arg.kind is ArgKind.SSH_ALIAS:
        return Host(_params_from_ssh_alias(arg.text, ssh_config), arg.password)
    try:
        params = parse_address(arg.text, default_protocol)
    except AddressParseError as e:
        raise BadAddress(str(e)) from e
    return Host(params, arg.password)


def _names_local_path(text: str) -> bool:
    """Return True if `text` names an existing filesystem entry.

    An empty token never does; unusable paths (too long, bad bytes) count as absent.
    """
    return bool(text) and os.path.exists(text)


@weave.op(postprocess_inputs=mask_trace_inputs, postprocess_output=describe_plan)
def resolve(
    bookmarks: Sequence[str],
    ssh_aliases: Sequence[str],
    positionals: Sequence[str],
    passwords: Sequence[str],
    *,
    ssh_config_path: str | Path,
    default_protocol: FileTransferProtocol = FileTransferProtocol.SFTP,
) -> ConnectionPlan:
    """Resolve command-line remotes into a connection plan.

    Args:
        bookmarks: Bookmark names, in command-line order.
        ssh_aliases: SSH-config host aliases, each optionally "alias:/path".
        positionals: Remote address strings, or a local directory last.
        passwords: Passwords paired by position with the concatenation of
            the three lists above.
        ssh_config_path: SSH client configuration to look aliases up in.
        default_protocol: Protocol for address strings without "proto://".

    Returns:
        The resolved ConnectionPlan. Both remotes are None when no host was
        given; rejecting that case is up to the caller.

    Raises:
        TooManyArguments: More than three tokens in total.
        BadAddress: A positional token is not a valid address.
        SshHostNotFound: An alias has no matching Host entry.
        SshConfigUnreadable: The SSH config could not be read or parsed.
    """
    args = classify_args(bookmarks, ssh_aliases, positionals, passwords)
    ssh_config = _SshConfigCache(Path(ssh_config_path))

    local_dir: Path | None = None
    hosts: list[Remote] = []
    for arg in args:
        if arg.is_last and _names_local_path(arg.text):
            local_dir = Path(arg.text)
            continue
        hosts.append(_resolve_arg(arg, ssh_config, default_protocol))

    # Two remotes: the first given is the target, the second the bridge
    if len(hosts) == 1:
        return ConnectionPlan(target=hosts[0], local_dir=local_dir)
    if len(hosts) == 2:
        return ConnectionPlan(target=hosts[0], bridge=hosts[1], local_dir=local_dir)
    return ConnectionPlan(local_dir=local_dir)
