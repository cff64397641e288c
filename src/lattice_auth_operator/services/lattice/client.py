"""AWS VPC Lattice client implementation."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics
from ...constants import RESOURCE_TYPE_SERVICE, RESOURCE_TYPE_SERVICE_NETWORK
from ...utils.errors import DependencyNotFoundError
from ...utils.rate_limit import rate_limit_lattice

logger = logging.getLogger(__name__)


class LatticeClient:
    """Thin wrapper around the boto3 ``vpc-lattice`` client."""

    def __init__(
        self,
        region: str,
        endpoint_url: str | None = None,
        timeout: float = 30.0,
        max_attempts: int = 3,
    ) -> None:
        """Initialize the Lattice client.

        Args:
            region: AWS region
            endpoint_url: Optional endpoint override
            timeout: Connect and read timeout applied to every call, in seconds
            max_attempts: Total attempts per call including botocore retries
        """
        self.region = region
        self.endpoint_url = endpoint_url

        config = Config(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"mode": "standard", "max_attempts": max_attempts},
        )

        self.client = boto3.client(
            "vpc-lattice",
            region_name=region,
            endpoint_url=endpoint_url,
            config=config,
        )

    def _call(self, operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
        """Invoke a Lattice API method with rate limiting and call metrics."""
        start_time = time.time()
        try:
            result = rate_limit_lattice(fn)(**kwargs)
            metrics.api_call_total.labels(api_type="lattice", operation=operation, result="success").inc()
            return result
        except (ClientError, BotoCoreError) as e:
            metrics.api_call_total.labels(api_type="lattice", operation=operation, result="error").inc()
            if isinstance(e, ClientError) and e.response.get("Error", {}).get("Code") == "ThrottlingException":
                metrics.rate_limit_hits_total.labels(api_type="lattice").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="lattice", operation=operation).observe(duration)

    def _list_all(self, operation: str) -> list[dict[str, Any]]:
        """Follow nextToken through every page; each page is one rate-limited call."""
        list_fn = getattr(self.client, operation)
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        while True:
            page = self._call(operation, list_fn, **kwargs)
            items.extend(page.get("items", []))
            next_token = page.get("nextToken")
            if not next_token:
                return items
            kwargs = {"nextToken": next_token}

    def list_service_networks(self) -> list[dict[str, Any]]:
        """List all service networks visible to the account."""
        try:
            return self._list_all("list_service_networks")
        except ClientError as e:
            logger.error(f"Failed to list service networks: {e}")
            raise

    def list_services(self) -> list[dict[str, Any]]:
        """List all services visible to the account."""
        try:
            return self._list_all("list_services")
        except ClientError as e:
            logger.error(f"Failed to list services: {e}")
            raise

    def find_service_network_id(self, name: str) -> str:
        """Return the id of the service network named ``name``.

        Raises:
            DependencyNotFoundError: If no service network has that name
        """
        for item in self.list_service_networks():
            if item.get("name") == name:
                return item["id"]
        raise DependencyNotFoundError(RESOURCE_TYPE_SERVICE_NETWORK, name)

    def find_service_id(self, name: str) -> str:
        """Return the id of the service named ``name``.

        Raises:
            DependencyNotFoundError: If no service has that name
        """
        for item in self.list_services():
            if item.get("name") == name:
                return item["id"]
        raise DependencyNotFoundError(RESOURCE_TYPE_SERVICE, name)

    def update_service_network_auth_type(self, service_network_id: str, auth_type: str) -> None:
        """Set the auth type of a service network."""
        try:
            self._call(
                "update_service_network",
                self.client.update_service_network,
                serviceNetworkIdentifier=service_network_id,
                authType=auth_type,
            )
        except ClientError as e:
            logger.error(f"Failed to set auth type {auth_type} on service network {service_network_id}: {e}")
            raise

    def update_service_auth_type(self, service_id: str, auth_type: str) -> None:
        """Set the auth type of a service."""
        try:
            self._call(
                "update_service",
                self.client.update_service,
                serviceIdentifier=service_id,
                authType=auth_type,
            )
        except ClientError as e:
            logger.error(f"Failed to set auth type {auth_type} on service {service_id}: {e}")
            raise

    def put_auth_policy(self, resource_id: str, policy: str) -> dict[str, Any]:
        """Attach ``policy`` to the resource, replacing any existing auth policy."""
        try:
            return self._call(
                "put_auth_policy",
                self.client.put_auth_policy,
                resourceIdentifier=resource_id,
                policy=policy,
            )
        except ClientError as e:
            logger.error(f"Failed to put auth policy on {resource_id}: {e}")
            raise

    def delete_auth_policy(self, resource_id: str) -> None:
        """Delete the auth policy attached to the resource."""
        try:
            self._call(
                "delete_auth_policy",
                self.client.delete_auth_policy,
                resourceIdentifier=resource_id,
            )
        except ClientError as e:
            logger.error(f"Failed to delete auth policy on {resource_id}: {e}")
            raise
