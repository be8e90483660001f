"""
SSH client configuration support.

Reads `~/.ssh/config` (or an injected path) with Paramiko and exposes host
blocks so SSH aliases given on the command line can be turned into
connection parameters.
"""

from .config import (
    SshHostEntry,
    SshHostPattern,
    default_ssh_config_path,
    find_host,
    load_ssh_config,
)

__all__ = [
    "SshHostEntry",
    "SshHostPattern",
    "default_ssh_config_path",
    "find_host",
    "load_ssh_config",
]
