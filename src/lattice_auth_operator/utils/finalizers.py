"""Finalizer primitives and the cleanup gate for IAMAuthPolicy resources."""

from __future__ import annotations

from ..constants import FINALIZER
from ..models import AuthPolicy


def contains_finalizer(policy: AuthPolicy, finalizer: str = FINALIZER) -> bool:
    """Check whether the finalizer is present on the policy."""
    return finalizer in policy.finalizers


def add_finalizer(policy: AuthPolicy, finalizer: str = FINALIZER) -> None:
    """Add the finalizer if it is not already present."""
    if finalizer not in policy.finalizers:
        policy.finalizers.append(finalizer)


def remove_finalizer(policy: AuthPolicy, finalizer: str = FINALIZER) -> None:
    """Remove every occurrence of the finalizer."""
    policy.finalizers[:] = [f for f in policy.finalizers if f != finalizer]


def handle_finalizer(policy: AuthPolicy) -> None:
    """Move the in-memory finalizer toward the state implied by deletion.

    A live policy gets the finalizer so the API server holds the object until
    Lattice cleanup has run. A policy marked for deletion loses it; the change
    is only persisted after the delete pipeline succeeds, which is what
    releases the object.
    """
    if not policy.deletion_requested:
        if not contains_finalizer(policy):
            add_finalizer(policy)
    else:
        if contains_finalizer(policy):
            remove_finalizer(policy)
