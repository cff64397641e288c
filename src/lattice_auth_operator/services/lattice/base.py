"""Interfaces consumed by the IAMAuthPolicy reconciler."""

from __future__ import annotations

from typing import Protocol

from ...models import AuthPolicyDocument


class NetworkResourceFinder(Protocol):
    """Name-based lookup of Lattice resources.

    Both methods raise DependencyNotFoundError when no resource matches.
    """

    def find_service_network_id(self, name: str) -> str:
        """Return the id of the service network with this name."""
        ...

    def find_service_id(self, name: str) -> str:
        """Return the id of the service with this name."""
        ...


class AuthStateManager(Protocol):
    """Auth mode and auth policy operations, keyed by Lattice resource id.

    Every operation is an idempotent set or delete.
    """

    def enable_auth(self, resource_id: str) -> None:
        """Require IAM-signed requests on the resource."""
        ...

    def disable_auth(self, resource_id: str) -> None:
        """Stop requiring IAM-signed requests on the resource."""
        ...

    def put_policy(self, document: AuthPolicyDocument) -> None:
        """Overwrite the auth policy attached to document.resource_id."""
        ...

    def delete_policy(self, resource_id: str) -> None:
        """Remove the auth policy attached to the resource."""
        ...
