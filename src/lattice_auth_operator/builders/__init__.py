"""Builders for operator clients."""

from .clients import create_custom_objects_api, create_lattice_client_from_env

__all__ = ["create_custom_objects_api", "create_lattice_client_from_env"]
