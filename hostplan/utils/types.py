"""Shared TypedDict contracts for printed and traced connection plans."""

from __future__ import annotations

from typing import TypedDict

from hostplan.remote import Bookmark, ConnectionPlan, Host, Remote

from .masking import mask_value


class RemoteResult(TypedDict, total=False):
    kind: str
    name: str
    protocol: str
    address: str
    port: int
    username: str | None
    remote_path: str | None
    password: str | None


class PlanResult(TypedDict):
    target: RemoteResult | None
    bridge: RemoteResult | None
    local_dir: str | None


def describe_remote(remote: Remote) -> RemoteResult | None:
    """Build a `RemoteResult` for one plan slot, masking any password.

    Raises:
        TypeError: If `remote` is not a Bookmark, a Host or None.
    """
    if remote is None:
        return None
    if isinstance(remote, Bookmark):
        return {
            "kind": "bookmark",
            "name": remote.name,
            "password": mask_value(remote.password),
        }
    if isinstance(remote, Host):
        params = remote.params
        return {
            "kind": "host",
            "protocol": params.protocol.value,
            "address": params.address,
            "port": params.port,
            "username": params.username,
            "remote_path": params.remote_path,
            "password": mask_value(remote.password),
        }
    raise TypeError(f"Unsupported remote: {remote!r}")


def describe_plan(plan: ConnectionPlan) -> PlanResult:
    """Return a JSON-serialisable view of a plan with passwords masked."""
    return {
        "target": describe_remote(plan.target),
        "bridge": describe_remote(plan.bridge),
        "local_dir": str(plan.local_dir) if plan.local_dir is not None else None,
    }
