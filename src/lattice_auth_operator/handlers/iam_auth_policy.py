"""Handler for IAMAuthPolicy CRD."""

from __future__ import annotations

import os
import uuid
from typing import Any, Callable

import kopf

from .. import metrics
from ..builders.clients import create_custom_objects_api, create_lattice_client_from_env
from ..constants import (
    ANNOTATION_RESOURCE_ID,
    API_GROUP_VERSION,
    DEPENDENCY_NOT_FOUND_REQUEUE_SECONDS,
    KIND_IAM_AUTH_POLICY,
    UNSUPPORTED_TARGET_REQUEUE_SECONDS,
)
from ..models import AuthPolicy, AuthPolicyDocument, ReconcileResult, TargetKind, TargetRef
from ..services.k8s.store import AuthPolicyStore
from ..services.lattice.auth_policy import LatticeAuthStateManager
from ..services.lattice.base import AuthStateManager
from ..services.lattice.resolver import TargetResolver
from ..tracing import add_span_attribute, trace_span
from ..utils.context import with_correlation_id
from ..utils.errors import DependencyNotFoundError, UnsupportedTargetError
from ..utils.events import (
    emit_auth_policy_applied,
    emit_auth_policy_deleted,
    emit_target_not_found,
    emit_unsupported_target,
)
from ..utils.finalizers import handle_finalizer
from .base import BaseHandler

Resolve = Callable[[TargetRef, str], str]
Pipeline = Callable[[AuthPolicy], str]


class IAMAuthPolicyHandler(BaseHandler):
    """Reconciles IAMAuthPolicy resources onto Lattice service networks and services."""

    def __init__(
        self,
        store: AuthPolicyStore,
        resolver: TargetResolver,
        auth_manager: AuthStateManager,
    ):
        super().__init__(KIND_IAM_AUTH_POLICY)
        self.store = store
        self.resolver = resolver
        self.auth_manager = auth_manager
        self._pipelines: dict[tuple[TargetKind, bool], Pipeline] = {}
        for kind in TargetKind:
            if kind.is_route:
                self._pipelines[(kind, False)] = self.upsert_route_policy
                self._pipelines[(kind, True)] = self.delete_route_policy
            else:
                self._pipelines[(kind, False)] = self.upsert_gateway_policy
                self._pipelines[(kind, True)] = self.delete_gateway_policy

    def reconcile(self, namespace: str, name: str) -> ReconcileResult:
        """Drive the Lattice auth state of one IAMAuthPolicy toward its spec.

        Returns:
            A result with requeue_after set when the policy must be retried
            later without counting as a failure

        Raises:
            ConflictOnPersistError: If the policy changed before write-back
            Exception: Any Lattice or Kubernetes API failure, unchanged
        """
        policy = self.store.get(namespace, name)
        if policy is None:
            self.log_info(
                {"name": name, "namespace": namespace},
                "IAMAuthPolicy no longer exists, nothing to do",
                reason="NotFound",
            )
            return ReconcileResult()

        self.log_info(policy.meta, "reconcile", event="reconcile", reason="Reconcile",
                      target_ref=policy.target_ref.to_log())

        handle_finalizer(policy)

        is_delete = policy.deletion_requested
        try:
            kind = TargetKind.parse(policy.target_ref.kind)
        except UnsupportedTargetError as e:
            self.log_error(policy.meta, "unsupported targetRef", error=e,
                           reason="UnsupportedTarget", kind=policy.target_ref.kind)
            emit_unsupported_target(policy.body, policy.target_ref.kind)
            metrics.requeue_total.labels(kind=self.kind, reason="UnsupportedTarget").inc()
            return ReconcileResult(requeue_after=UNSUPPORTED_TARGET_REQUEUE_SECONDS)

        pipeline = self._pipelines[(kind, is_delete)]
        try:
            with trace_span(
                "reconcile_iam_auth_policy",
                kind=self.kind,
                attributes={"policy.name": policy.name, "target.kind": kind.value, "delete": is_delete},
            ):
                resource_id = pipeline(policy)
        except DependencyNotFoundError as e:
            self.log_info(policy.meta, f"reconcile error, retry in 30sec: {e}",
                          reason="DependencyNotFound", target_ref=policy.target_ref.to_log())
            emit_target_not_found(policy.body, str(e))
            metrics.requeue_total.labels(kind=self.kind, reason="DependencyNotFound").inc()
            return ReconcileResult(requeue_after=DEPENDENCY_NOT_FOUND_REQUEUE_SECONDS)

        policy.annotations[ANNOTATION_RESOURCE_ID] = resource_id
        self.store.update(policy)

        self.log_info(
            policy.meta,
            "reconciled IAM policy",
            event="reconciled",
            reason="Reconciled",
            target_ref=policy.target_ref.to_log(),
            lattice_resource_id=resource_id,
            is_deleted=is_delete,
        )
        return ReconcileResult()

    def _upsert(self, policy: AuthPolicy, resolve: Resolve) -> str:
        """Resolve the target, enable IAM auth, then overwrite its auth policy."""
        with trace_span("resolve_target", kind=self.kind):
            resource_id = resolve(policy.target_ref, policy.namespace)
            add_span_attribute("lattice.resource_id", resource_id)

        self.auth_manager.enable_auth(resource_id)
        self.auth_manager.put_policy(AuthPolicyDocument(resource_id=resource_id, policy=policy.policy))

        emit_auth_policy_applied(policy.body, resource_id)
        return resource_id

    def _delete(self, policy: AuthPolicy, resolve: Resolve) -> str:
        """Resolve the target, detach its auth policy, then disable IAM auth."""
        with trace_span("resolve_target", kind=self.kind):
            resource_id = resolve(policy.target_ref, policy.namespace)
            add_span_attribute("lattice.resource_id", resource_id)

        self.auth_manager.delete_policy(resource_id)
        self.auth_manager.disable_auth(resource_id)

        emit_auth_policy_deleted(policy.body, resource_id)
        return resource_id

    def upsert_gateway_policy(self, policy: AuthPolicy) -> str:
        return self._upsert(policy, self.resolver.resolve_gateway_target)

    def delete_gateway_policy(self, policy: AuthPolicy) -> str:
        return self._delete(policy, self.resolver.resolve_gateway_target)

    def upsert_route_policy(self, policy: AuthPolicy) -> str:
        return self._upsert(policy, self.resolver.resolve_route_target)

    def delete_route_policy(self, policy: AuthPolicy) -> str:
        return self._delete(policy, self.resolver.resolve_route_target)


# Global handler instance, built on first use so importing needs no cluster access
_handler: IAMAuthPolicyHandler | None = None


def get_handler() -> IAMAuthPolicyHandler:
    """Return the process-wide handler, creating its clients on first call."""
    global _handler
    if _handler is None:
        lattice = create_lattice_client_from_env()
        _handler = IAMAuthPolicyHandler(
            store=AuthPolicyStore(create_custom_objects_api()),
            resolver=TargetResolver(lattice),
            auth_manager=LatticeAuthStateManager(lattice),
        )
    return _handler


def reconcile_or_requeue(handler: IAMAuthPolicyHandler, namespace: str, name: str) -> None:
    """Run one reconcile and turn a requested requeue into a kopf.TemporaryError."""
    result = handler.reconcile(namespace, name)
    if result.requeue:
        raise kopf.TemporaryError(
            f"IAMAuthPolicy {namespace}/{name} requeued in {result.requeue_after:.0f}s",
            delay=result.requeue_after,
        )


def run_reconcile(body: kopf.Body | dict[str, Any], namespace: str, name: str) -> None:
    """Reconcile one IAMAuthPolicy under a fresh correlation id."""
    handler = get_handler()
    with with_correlation_id(uuid.uuid4().hex):
        handler.reconcile_with_metrics(dict(body), lambda: reconcile_or_requeue(handler, namespace, name))


@kopf.on.create(API_GROUP_VERSION, KIND_IAM_AUTH_POLICY)
@kopf.on.resume(API_GROUP_VERSION, KIND_IAM_AUTH_POLICY)
@kopf.on.update(API_GROUP_VERSION, KIND_IAM_AUTH_POLICY, field="spec")
def handle_iam_auth_policy(
    body: kopf.Body,
    name: str,
    namespace: str,
    **kwargs: Any,
) -> None:
    """Handle IAMAuthPolicy reconciliation."""
    run_reconcile(body, namespace, name)


@kopf.on.delete(API_GROUP_VERSION, KIND_IAM_AUTH_POLICY)
def handle_iam_auth_policy_delete(
    body: kopf.Body,
    name: str,
    namespace: str,
    **kwargs: Any,
) -> None:
    """Handle IAMAuthPolicy deletion.

    kopf only calls delete handlers while its own finalizer is on the object,
    so it is added next to the operator's. The reconcile releases the
    operator's finalizer once Lattice is cleaned up; kopf releases its own
    after this handler returns.
    """
    run_reconcile(body, namespace, name)


@kopf.timer(
    API_GROUP_VERSION,
    KIND_IAM_AUTH_POLICY,
    interval=float(os.getenv("RESYNC_INTERVAL_SECONDS", "300")),
    idle=float(os.getenv("RESYNC_INTERVAL_SECONDS", "300")),
)
def resync_iam_auth_policy(
    body: kopf.Body,
    name: str,
    namespace: str,
    **kwargs: Any,
) -> None:
    """Periodically re-apply the policy so changes made directly in Lattice are reverted."""
    run_reconcile(body, namespace, name)
