"""Rate limiting utilities for API calls."""

from __future__ import annotations

import os
import time
from functools import wraps
from typing import Any, Callable, TypeVar

from kubernetes.client.exceptions import ApiException

from .. import metrics

_F = TypeVar("_F", bound=Callable[..., Any])

# Rate limit configuration
_K8S_RATE_LIMIT_PER_SECOND = float(os.getenv("K8S_RATE_LIMIT_PER_SECOND", "10.0"))
_LATTICE_RATE_LIMIT_PER_SECOND = float(os.getenv("LATTICE_RATE_LIMIT_PER_SECOND", "5.0"))

# Track last call times
_k8s_last_call_time: float = 0.0
_lattice_last_call_time: float = 0.0


def rate_limit_k8s(func: _F) -> _F:
    """Decorator to rate limit Kubernetes API calls.

    Spaces calls at least 1/K8S_RATE_LIMIT_PER_SECOND seconds apart to
    avoid overwhelming the Kubernetes API server.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        global _k8s_last_call_time
        current_time = time.time()
        min_interval = 1.0 / _K8S_RATE_LIMIT_PER_SECOND

        time_since_last_call = current_time - _k8s_last_call_time
        if time_since_last_call < min_interval:
            time.sleep(min_interval - time_since_last_call)

        _k8s_last_call_time = time.time()
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def rate_limit_lattice(func: _F) -> _F:
    """Decorator to rate limit VPC Lattice API calls."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        global _lattice_last_call_time
        current_time = time.time()
        min_interval = 1.0 / _LATTICE_RATE_LIMIT_PER_SECOND

        time_since_last_call = current_time - _lattice_last_call_time
        if time_since_last_call < min_interval:
            time.sleep(min_interval - time_since_last_call)

        _lattice_last_call_time = time.time()
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def handle_rate_limit_error(e: ApiException, attempt: int, max_retries: int = 3) -> bool:
    """Check if an API exception is a rate limit error and back off.

    Sleeps 2**attempt seconds (1s, 2s, 4s) and returns True while attempts
    remain; the caller is expected to retry the call with attempt + 1.

    Args:
        e: API exception
        attempt: Zero-based number of retries already made for this call
        max_retries: Maximum number of retries

    Returns:
        True if the caller should retry, False otherwise
    """
    status = getattr(e, "status", None)
    if status == 429 or (status == 503 and "rate limit" in str(e).lower()):
        metrics.rate_limit_hits_total.labels(api_type="k8s").inc()
        if attempt < max_retries:
            time.sleep(2 ** attempt)
            return True
    return False
