"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_AUTH_POLICY_APPLIED,
    EVENT_REASON_AUTH_POLICY_DELETED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_TARGET_NOT_FOUND,
    EVENT_REASON_UNSUPPORTED_TARGET,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body (apiVersion, kind and metadata are used for the reference)
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_auth_policy_applied(body: dict[str, Any], resource_id: str) -> None:
    """Emit auth policy applied event."""
    emit_event(body, EVENT_REASON_AUTH_POLICY_APPLIED, f"IAM auth policy applied to {resource_id}")


def emit_auth_policy_deleted(body: dict[str, Any], resource_id: str) -> None:
    """Emit auth policy deleted event."""
    emit_event(body, EVENT_REASON_AUTH_POLICY_DELETED, f"IAM auth policy removed from {resource_id}")


def emit_target_not_found(body: dict[str, Any], message: str) -> None:
    """Emit target not found event."""
    emit_event(body, EVENT_REASON_TARGET_NOT_FOUND, message)


def emit_unsupported_target(body: dict[str, Any], kind: str) -> None:
    """Emit unsupported target event."""
    emit_event(
        body,
        EVENT_REASON_UNSUPPORTED_TARGET,
        f"targetRef kind {kind} is not supported",
        type_="Warning",
    )
