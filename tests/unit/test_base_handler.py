"""Tests for base handler functionality."""

from __future__ import annotations

import json
import logging
from unittest.mock import Mock, patch

import kopf
import pytest

from lattice_auth_operator.handlers.base import BaseHandler

BODY = {
    "apiVersion": "application-networking.k8s.aws/v1alpha1",
    "kind": "IAMAuthPolicy",
    "metadata": {"name": "test-resource", "namespace": "default", "uid": "uid-1"},
}


class TestBaseHandler:
    """Test cases for BaseHandler class."""

    def test_init(self):
        """Test handler initialization."""
        handler = BaseHandler(kind="TestKind")
        assert handler.kind == "TestKind"
        assert handler.logger is not None

    def test_resource_context_defaults(self):
        """Test that missing metadata falls back to placeholders."""
        handler = BaseHandler(kind="TestKind")

        ctx = handler._get_resource_context({})

        assert ctx == {"name": "unknown", "namespace": "default", "uid": "unknown"}

    def test_log_info_is_structured(self, caplog):
        """Test that log_info emits one JSON record with resource fields."""
        handler = BaseHandler(kind="TestKind")

        with caplog.at_level(logging.INFO):
            handler.log_info(BODY["metadata"], "hello", reason="Greeting", extra_field=1)

        record = json.loads(caplog.records[-1].getMessage())
        assert record["resource"] == "TestKind"
        assert record["name"] == "test-resource"
        assert record["reason"] == "Greeting"
        assert record["message"] == "hello"
        assert record["extra_field"] == 1

    def test_log_error_sanitizes(self, caplog):
        """Test that log_error redacts sensitive fields and error text."""
        handler = BaseHandler(kind="TestKind")
        error = RuntimeError("token: abc123")

        with caplog.at_level(logging.ERROR):
            handler.log_error(BODY["metadata"], "failed", error=error, session_token="xyz")

        record = json.loads(caplog.records[-1].getMessage())
        assert record["session_token"] == "[REDACTED]"
        assert "abc123" not in record["error"]
        assert record["error_type"] == "RuntimeError"

    @patch("lattice_auth_operator.handlers.base.emit_reconcile_started")
    @patch("lattice_auth_operator.handlers.base.metrics")
    def test_reconcile_with_metrics_success(self, mock_metrics, mock_emit_started):
        """Test successful reconciliation with metrics."""
        handler = BaseHandler(kind="TestKind")
        reconcile_fn = Mock(return_value="done")

        result = handler.reconcile_with_metrics(BODY, reconcile_fn)

        assert result == "done"
        reconcile_fn.assert_called_once()
        mock_emit_started.assert_called_once_with(BODY)
        mock_metrics.reconcile_total.labels.assert_any_call(kind="TestKind", result="started")
        mock_metrics.reconcile_total.labels.assert_any_call(kind="TestKind", result="success")
        assert mock_metrics.reconcile_duration_seconds.labels.called

    @patch("lattice_auth_operator.handlers.base.emit_reconcile_failed")
    @patch("lattice_auth_operator.handlers.base.emit_reconcile_started")
    @patch("lattice_auth_operator.handlers.base.metrics")
    @patch("lattice_auth_operator.handlers.base.sanitize_exception")
    def test_reconcile_with_metrics_failure(
        self, mock_sanitize, mock_metrics, mock_emit_started, mock_emit_failed
    ):
        """Test failed reconciliation with metrics and error handling."""
        handler = BaseHandler(kind="TestKind")
        test_error = ValueError("Test error")
        mock_sanitize.return_value = "Sanitized error"

        def failing_fn():
            raise test_error

        with pytest.raises(ValueError):
            handler.reconcile_with_metrics(BODY, failing_fn)

        mock_sanitize.assert_any_call(test_error)
        mock_emit_started.assert_called_once_with(BODY)
        mock_emit_failed.assert_called_once_with(BODY, "Reconciliation failed: Sanitized error")
        mock_metrics.error_total.labels.assert_called_with(kind="TestKind", error_type="ValueError")
        mock_metrics.reconcile_total.labels.assert_any_call(kind="TestKind", result="error")

    @patch("lattice_auth_operator.handlers.base.emit_reconcile_failed")
    @patch("lattice_auth_operator.handlers.base.emit_reconcile_started")
    @patch("lattice_auth_operator.handlers.base.metrics")
    def test_reconcile_with_metrics_requeue(self, mock_metrics, mock_emit_started, mock_emit_failed):
        """Test that a TemporaryError counts as a requeue, not an error."""
        handler = BaseHandler(kind="TestKind")

        def requeue_fn():
            raise kopf.TemporaryError("later", delay=30)

        with pytest.raises(kopf.TemporaryError):
            handler.reconcile_with_metrics(BODY, requeue_fn)

        mock_emit_failed.assert_not_called()
        mock_metrics.error_total.labels.assert_not_called()
        mock_metrics.reconcile_total.labels.assert_any_call(kind="TestKind", result="requeued")
        assert mock_metrics.reconcile_duration_seconds.labels.called
