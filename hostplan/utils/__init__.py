"""Utility helpers shared by the resolver and the CLI.

- masking: keep passwords out of printed plans and traces
- types: TypedDict contracts for plan output
"""

from .masking import mask_passwords, mask_trace_inputs, mask_value
from .types import PlanResult, RemoteResult, describe_plan, describe_remote

__all__ = [
    "PlanResult",
    "RemoteResult",
    "describe_plan",
    "describe_remote",
    "mask_passwords",
    "mask_trace_inputs",
    "mask_value",
]
