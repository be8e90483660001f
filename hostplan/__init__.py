"""
Resolve command-line remotes into a connection plan.

Bookmark names, SSH-config aliases and remote address strings are combined
into a target, an optional bridge host and an optional local directory.
"""

from hostplan.errors import (
    BadAddress,
    SshConfigUnreadable,
    SshHostNotFound,
    TooManyArguments,
    ValidationError,
)
from hostplan.remote import Bookmark, ConnectionPlan, Host, Remote
from hostplan.resolver import resolve

__all__ = [
    "BadAddress",
    "Bookmark",
    "ConnectionPlan",
    "Host",
    "Remote",
    "SshConfigUnreadable",
    "SshHostNotFound",
    "TooManyArguments",
    "ValidationError",
    "resolve",
]
