"""Resolution of IAMAuthPolicy targets to Lattice resource ids."""

from __future__ import annotations

from ...constants import SERVICE_NAME_NAMESPACE_MAX_LENGTH, SERVICE_NAME_ROUTE_MAX_LENGTH
from ...models import TargetRef
from .base import NetworkResourceFinder


def lattice_service_name(route_name: str, namespace: str) -> str:
    """Name of the Lattice service created for a route.

    Must stay identical to the naming used by the controller that creates
    Lattice services for HTTPRoutes and GRPCRoutes: lookups join on it.
    """
    return f"{route_name[:SERVICE_NAME_ROUTE_MAX_LENGTH]}-{namespace[:SERVICE_NAME_NAMESPACE_MAX_LENGTH]}"


class TargetResolver:
    """Read-only lookups mapping a targetRef to a Lattice resource id."""

    def __init__(self, finder: NetworkResourceFinder) -> None:
        self.finder = finder

    def resolve_gateway_target(self, target_ref: TargetRef, namespace: str | None = None) -> str:
        """Return the service network id for a Gateway target.

        Service networks are named after the Gateway, so namespace is unused.
        """
        return self.finder.find_service_network_id(target_ref.name)

    def resolve_route_target(self, target_ref: TargetRef, namespace: str) -> str:
        """Return the service id for an HTTPRoute or GRPCRoute target."""
        return self.finder.find_service_id(lattice_service_name(target_ref.name, namespace))
