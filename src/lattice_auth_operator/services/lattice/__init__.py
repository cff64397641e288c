"""VPC Lattice lookups and auth state management."""

from .auth_policy import LatticeAuthStateManager
from .base import AuthStateManager, NetworkResourceFinder
from .client import LatticeClient
from .resolver import TargetResolver, lattice_service_name

__all__ = [
    "AuthStateManager",
    "LatticeAuthStateManager",
    "LatticeClient",
    "NetworkResourceFinder",
    "TargetResolver",
    "lattice_service_name",
]
