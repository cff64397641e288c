"""Domain models for IAMAuthPolicy reconciliation."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .constants import (
    TARGET_KIND_GATEWAY,
    TARGET_KIND_GRPC_ROUTE,
    TARGET_KIND_HTTP_ROUTE,
)
from .utils.errors import UnsupportedTargetError


class TargetKind(str, Enum):
    """Supported targetRef kinds."""

    GATEWAY = TARGET_KIND_GATEWAY
    HTTP_ROUTE = TARGET_KIND_HTTP_ROUTE
    GRPC_ROUTE = TARGET_KIND_GRPC_ROUTE

    @classmethod
    def parse(cls, kind: str) -> TargetKind:
        """Map a raw targetRef kind to a TargetKind.

        Raises:
            UnsupportedTargetError: If kind is not one of the supported values
        """
        try:
            return cls(kind)
        except ValueError:
            raise UnsupportedTargetError(kind) from None

    @property
    def is_route(self) -> bool:
        return self in (TargetKind.HTTP_ROUTE, TargetKind.GRPC_ROUTE)


@dataclass(frozen=True)
class TargetRef:
    """Reference to the Gateway or route a policy is attached to."""

    kind: str
    name: str
    group: str | None = None

    @classmethod
    def from_spec(cls, target_ref: dict[str, Any]) -> TargetRef:
        return cls(
            kind=target_ref.get("kind", ""),
            name=target_ref.get("name", ""),
            group=target_ref.get("group"),
        )

    def to_log(self) -> dict[str, str]:
        return {"kind": self.kind, "name": self.name}


@dataclass
class AuthPolicy:
    """In-memory view of an IAMAuthPolicy resource.

    Finalizers and annotations are mutable; everything else reflects the
    body as fetched. ``to_body`` folds the mutations back into a copy of the
    original body for write-back, so fields this model does not know about
    survive the round trip.
    """

    name: str
    namespace: str
    target_ref: TargetRef
    policy: str
    deletion_requested: bool
    finalizers: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    uid: str = "unknown"
    resource_version: str | None = None
    body: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> AuthPolicy:
        """Build an AuthPolicy from a raw custom object."""
        meta = body.get("metadata", {})
        spec = body.get("spec", {})

        policy = spec.get("policy", "")
        if not isinstance(policy, str):
            # Structured documents are serialized once, never interpreted
            policy = json.dumps(policy)

        return cls(
            name=meta.get("name", ""),
            namespace=meta.get("namespace", "default"),
            target_ref=TargetRef.from_spec(spec.get("targetRef", {})),
            policy=policy,
            deletion_requested=bool(meta.get("deletionTimestamp")),
            finalizers=list(meta.get("finalizers") or []),
            annotations=dict(meta.get("annotations") or {}),
            uid=meta.get("uid", "unknown"),
            resource_version=meta.get("resourceVersion"),
            body=copy.deepcopy(body),
        )

    @property
    def meta(self) -> dict[str, Any]:
        """Metadata view used for structured logging."""
        return {"name": self.name, "namespace": self.namespace, "uid": self.uid}

    def to_body(self) -> dict[str, Any]:
        """Return the resource body with current finalizers and annotations applied."""
        body = copy.deepcopy(self.body)
        meta = body.setdefault("metadata", {})
        meta["finalizers"] = list(self.finalizers)
        meta["annotations"] = dict(self.annotations)
        if self.resource_version is not None:
            meta["resourceVersion"] = self.resource_version
        return body


@dataclass(frozen=True)
class AuthPolicyDocument:
    """Auth policy to attach to a Lattice service network or service."""

    resource_id: str
    policy: str


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconcile; requeue_after is a delay in seconds."""

    requeue_after: float | None = None

    @property
    def requeue(self) -> bool:
        return self.requeue_after is not None
