"""Tests for Kubernetes event utilities."""

from __future__ import annotations

from unittest.mock import patch

from lattice_auth_operator.utils.events import (
    emit_auth_policy_applied,
    emit_auth_policy_deleted,
    emit_event,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_target_not_found,
    emit_unsupported_target,
)

BODY = {"metadata": {"name": "test-policy", "namespace": "default"}}


class TestEmitEvent:
    """Test cases for emit_event function."""

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_event_normal(self, mock_event):
        """Test emitting normal event."""
        emit_event(BODY, "TestReason", "Test message")

        mock_event.assert_called_once_with(
            BODY,
            reason="TestReason",
            message="Test message",
            type="Normal",
        )

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_event_warning(self, mock_event):
        """Test emitting warning event."""
        emit_event(BODY, "ErrorReason", "Error occurred", type_="Warning")

        mock_event.assert_called_once_with(
            BODY,
            reason="ErrorReason",
            message="Error occurred",
            type="Warning",
        )


class TestReconcileEvents:
    """Test cases for reconciliation events."""

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_reconcile_started(self, mock_event):
        """Test emitting reconcile started event."""
        emit_reconcile_started(BODY)

        call_args = mock_event.call_args
        assert call_args[0][0] == BODY
        assert call_args[1]["reason"] == "ReconcileStarted"
        assert call_args[1]["type"] == "Normal"

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_reconcile_failed(self, mock_event):
        """Test emitting reconcile failed event."""
        emit_reconcile_failed(BODY, "Lattice unavailable")

        call_args = mock_event.call_args
        assert "Lattice unavailable" in call_args[1]["message"]
        assert call_args[1]["type"] == "Warning"


class TestAuthPolicyEvents:
    """Test cases for auth policy events."""

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_auth_policy_applied(self, mock_event):
        """Test emitting auth policy applied event."""
        emit_auth_policy_applied(BODY, "sn-123")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "AuthPolicyApplied"
        assert "sn-123" in call_args[1]["message"]
        assert call_args[1]["type"] == "Normal"

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_auth_policy_deleted(self, mock_event):
        """Test emitting auth policy deleted event."""
        emit_auth_policy_deleted(BODY, "svc-1")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "AuthPolicyDeleted"
        assert "svc-1" in call_args[1]["message"]

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_target_not_found(self, mock_event):
        """Test emitting target not found event."""
        emit_target_not_found(BODY, "ServiceNetwork gw1 not found")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "TargetNotFound"
        assert call_args[1]["message"] == "ServiceNetwork gw1 not found"

    @patch("lattice_auth_operator.utils.events.kopf.event")
    def test_emit_unsupported_target(self, mock_event):
        """Test emitting unsupported target event."""
        emit_unsupported_target(BODY, "Service")

        call_args = mock_event.call_args
        assert call_args[1]["reason"] == "UnsupportedTarget"
        assert "Service" in call_args[1]["message"]
        assert call_args[1]["type"] == "Warning"
