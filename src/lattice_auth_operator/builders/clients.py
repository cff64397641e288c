"""Builders for the Kubernetes and VPC Lattice clients."""

from __future__ import annotations

import os

from kubernetes import client, config

from ..services.lattice.client import LatticeClient


def create_lattice_client_from_env() -> LatticeClient:
    """Create a Lattice client from environment configuration.

    Environment Variables:
        AWS_REGION / AWS_DEFAULT_REGION: Region of the Lattice resources
        LATTICE_ENDPOINT_URL: Optional endpoint override
        AWS_API_TIMEOUT_SECONDS: Connect/read timeout per call (default: 30)
        AWS_MAX_ATTEMPTS: Attempts per call including retries (default: 3)

    Raises:
        ValueError: If no region is configured
    """
    region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    if not region:
        raise ValueError("AWS_REGION or AWS_DEFAULT_REGION is required")

    return LatticeClient(
        region=region,
        endpoint_url=os.getenv("LATTICE_ENDPOINT_URL") or None,
        timeout=float(os.getenv("AWS_API_TIMEOUT_SECONDS", "30")),
        max_attempts=int(os.getenv("AWS_MAX_ATTEMPTS", "3")),
    )


def create_custom_objects_api() -> client.CustomObjectsApi:
    """Get a Kubernetes CustomObjectsApi client, in-cluster config first."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()

    return client.CustomObjectsApi()
