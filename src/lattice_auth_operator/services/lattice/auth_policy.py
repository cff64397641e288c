"""Lattice implementation of the auth state manager."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from botocore.exceptions import ClientError

from ... import metrics
from ...constants import (
    AUTH_TYPE_IAM,
    AUTH_TYPE_NONE,
    RESOURCE_TYPE_SERVICE,
    RESOURCE_TYPE_SERVICE_NETWORK,
)
from ...models import AuthPolicyDocument
from .client import LatticeClient

logger = logging.getLogger(__name__)


def resource_type_of(resource_id: str) -> str:
    """Derive the Lattice resource type from an id or ARN.

    Raises:
        ValueError: If the identifier is neither a service network nor a service
    """
    if resource_id.startswith("arn:"):
        if ":servicenetwork/" in resource_id:
            return RESOURCE_TYPE_SERVICE_NETWORK
        if ":service/" in resource_id:
            return RESOURCE_TYPE_SERVICE
    elif resource_id.startswith("sn-"):
        return RESOURCE_TYPE_SERVICE_NETWORK
    elif resource_id.startswith("svc-"):
        return RESOURCE_TYPE_SERVICE
    raise ValueError(f"Cannot determine Lattice resource type of {resource_id}")


@contextmanager
def _record_operation(operation: str) -> Iterator[None]:
    """Count the enclosed auth operation as a success or an error."""
    try:
        yield
    except Exception:
        metrics.auth_policy_operations_total.labels(operation=operation, result="error").inc()
        raise
    metrics.auth_policy_operations_total.labels(operation=operation, result="success").inc()


class LatticeAuthStateManager:
    """Toggles IAM auth and attaches auth policies on Lattice resources."""

    def __init__(self, lattice: LatticeClient) -> None:
        self.lattice = lattice

    def _set_auth_type(self, resource_id: str, auth_type: str) -> None:
        if resource_type_of(resource_id) == RESOURCE_TYPE_SERVICE_NETWORK:
            self.lattice.update_service_network_auth_type(resource_id, auth_type)
        else:
            self.lattice.update_service_auth_type(resource_id, auth_type)

    def enable_auth(self, resource_id: str) -> None:
        """Set authType AWS_IAM on the service network or service."""
        with _record_operation("enable_auth"):
            self._set_auth_type(resource_id, AUTH_TYPE_IAM)
        logger.info(f"Enabled IAM auth on {resource_id}")

    def disable_auth(self, resource_id: str) -> None:
        """Set authType NONE on the service network or service."""
        with _record_operation("disable_auth"):
            self._set_auth_type(resource_id, AUTH_TYPE_NONE)
        logger.info(f"Disabled IAM auth on {resource_id}")

    def put_policy(self, document: AuthPolicyDocument) -> None:
        """Overwrite the auth policy on document.resource_id."""
        with _record_operation("put_policy"):
            response = self.lattice.put_auth_policy(document.resource_id, document.policy)
        logger.info(f"Put auth policy on {document.resource_id}, state {response.get('state')}")

    def delete_policy(self, resource_id: str) -> None:
        """Delete the auth policy on the resource; a missing policy counts as deleted."""
        with _record_operation("delete_policy"):
            try:
                self.lattice.delete_auth_policy(resource_id)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") != "ResourceNotFoundException":
                    raise
                logger.info(f"No auth policy attached to {resource_id}")
