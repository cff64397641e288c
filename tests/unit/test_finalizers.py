"""Tests for finalizer primitives and the cleanup gate."""

from __future__ import annotations

from fakes import make_body
from lattice_auth_operator.constants import FINALIZER
from lattice_auth_operator.models import AuthPolicy
from lattice_auth_operator.utils.finalizers import (
    add_finalizer,
    contains_finalizer,
    handle_finalizer,
    remove_finalizer,
)


def policy_with(finalizers: list[str], deleting: bool = False) -> AuthPolicy:
    return AuthPolicy.from_body(make_body(finalizers=finalizers, deleting=deleting))


class TestPrimitives:
    """Test cases for contains/add/remove."""

    def test_contains(self):
        """Test finalizer presence check."""
        assert contains_finalizer(policy_with([FINALIZER]))
        assert not contains_finalizer(policy_with(["other"]))

    def test_add_no_duplicate(self):
        """Test that adding twice keeps a single entry."""
        policy = policy_with([])
        add_finalizer(policy)
        add_finalizer(policy)
        assert policy.finalizers == [FINALIZER]

    def test_remove_keeps_others(self):
        """Test that only the given finalizer is removed."""
        policy = policy_with(["a", FINALIZER, "b"])
        remove_finalizer(policy)
        assert policy.finalizers == ["a", "b"]

    def test_remove_absent(self):
        """Test that removing an absent finalizer is a no-op."""
        policy = policy_with(["a"])
        remove_finalizer(policy)
        assert policy.finalizers == ["a"]


class TestHandleFinalizer:
    """Test cases for the cleanup gate state machine."""

    def test_absent_live_adds(self):
        """Test (absent, not deleting) -> present."""
        policy = policy_with([], deleting=False)
        handle_finalizer(policy)
        assert contains_finalizer(policy)

    def test_present_deleting_removes(self):
        """Test (present, deleting) -> absent."""
        policy = policy_with([FINALIZER], deleting=True)
        handle_finalizer(policy)
        assert not contains_finalizer(policy)

    def test_present_live_noop(self):
        """Test (present, not deleting) stays present."""
        policy = policy_with([FINALIZER], deleting=False)
        handle_finalizer(policy)
        assert policy.finalizers == [FINALIZER]

    def test_absent_deleting_noop(self):
        """Test (absent, deleting) stays absent."""
        policy = policy_with(["other"], deleting=True)
        handle_finalizer(policy)
        assert policy.finalizers == ["other"]

    def test_idempotent(self):
        """Test that repeated application converges."""
        policy = policy_with([])
        handle_finalizer(policy)
        handle_finalizer(policy)
        assert policy.finalizers == [FINALIZER]
