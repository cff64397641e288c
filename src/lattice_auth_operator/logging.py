"""Structured logging configuration for the Lattice Auth Operator."""

import json
import logging
import sys
from typing import Any

from .utils.context import get_context_dict, propagate_trace_context


def setup_structured_logging() -> None:
    """Configure structured JSON logging."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "namespace": namespace,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(get_context_dict())
    trace_context = propagate_trace_context()
    if trace_context:
        log_data.update(trace_context)
    log_data.update(kwargs)
    logger.log(level, json.dumps(log_data, default=str))
