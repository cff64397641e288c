"""Utility functions for the Lattice Auth Operator."""

from .context import (
    get_context_dict,
    get_correlation_id,
    propagate_trace_context,
    with_correlation_id,
)
from .errors import (
    ConflictOnPersistError,
    DependencyNotFoundError,
    LatticeAuthOperatorError,
    UnsupportedTargetError,
    sanitize_exception,
)
from .events import emit_event
from .rate_limit import handle_rate_limit_error, rate_limit_k8s, rate_limit_lattice

__all__ = [
    "ConflictOnPersistError",
    "DependencyNotFoundError",
    "LatticeAuthOperatorError",
    "UnsupportedTargetError",
    "sanitize_exception",
    "emit_event",
    "rate_limit_k8s",
    "rate_limit_lattice",
    "handle_rate_limit_error",
    "get_correlation_id",
    "with_correlation_id",
    "get_context_dict",
    "propagate_trace_context",
]
