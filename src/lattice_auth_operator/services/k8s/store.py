"""Read and write-back of IAMAuthPolicy custom objects."""

from __future__ import annotations

import os
import time
from typing import Any

from kubernetes import client

from ... import metrics
from ...constants import API_GROUP, API_VERSION, PLURAL_IAM_AUTH_POLICY
from ...models import AuthPolicy
from ...utils.errors import ConflictOnPersistError
from ...utils.rate_limit import handle_rate_limit_error, rate_limit_k8s

_K8S_REQUEST_TIMEOUT = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30.0"))


class AuthPolicyStore:
    """IAMAuthPolicy access through the CustomObjectsApi."""

    def __init__(self, api: client.CustomObjectsApi, request_timeout: float = _K8S_REQUEST_TIMEOUT) -> None:
        self.api = api
        self.request_timeout = request_timeout

    def get(self, namespace: str, name: str) -> AuthPolicy | None:
        """Fetch an IAMAuthPolicy.

        Args:
            namespace: Namespace of the policy
            name: Name of the policy

        Returns:
            The policy, or None if it no longer exists

        Raises:
            client.exceptions.ApiException: On any API error other than 404
        """
        attempt = 0
        while True:
            start_time = time.time()
            try:
                body = rate_limit_k8s(self.api.get_namespaced_custom_object)(
                    group=API_GROUP,
                    version=API_VERSION,
                    namespace=namespace,
                    plural=PLURAL_IAM_AUTH_POLICY,
                    name=name,
                    _request_timeout=self.request_timeout,
                )
                metrics.api_call_total.labels(api_type="k8s", operation="get_iam_auth_policy", result="success").inc()
                return AuthPolicy.from_body(body)
            except client.exceptions.ApiException as e:
                if e.status == 404:
                    metrics.api_call_total.labels(api_type="k8s", operation="get_iam_auth_policy", result="not_found").inc()
                    return None
                metrics.api_call_total.labels(api_type="k8s", operation="get_iam_auth_policy", result="error").inc()
                if not handle_rate_limit_error(e, attempt):
                    raise
                attempt += 1
            finally:
                duration = time.time() - start_time
                metrics.api_call_duration_seconds.labels(api_type="k8s", operation="get_iam_auth_policy").observe(duration)

    def update(self, policy: AuthPolicy) -> dict[str, Any]:
        """Replace the stored object with the policy's finalizers and annotations.

        The write carries the resourceVersion read by ``get``, so a concurrent
        modification is rejected instead of overwritten.

        Raises:
            ConflictOnPersistError: If the object changed since it was read
            client.exceptions.ApiException: On any other API error
        """
        start_time = time.time()
        try:
            updated = rate_limit_k8s(self.api.replace_namespaced_custom_object)(
                group=API_GROUP,
                version=API_VERSION,
                namespace=policy.namespace,
                plural=PLURAL_IAM_AUTH_POLICY,
                name=policy.name,
                body=policy.to_body(),
                _request_timeout=self.request_timeout,
            )
            metrics.api_call_total.labels(api_type="k8s", operation="update_iam_auth_policy", result="success").inc()
            return updated
        except client.exceptions.ApiException as e:
            if e.status == 409:
                metrics.api_call_total.labels(api_type="k8s", operation="update_iam_auth_policy", result="conflict").inc()
                raise ConflictOnPersistError(policy.namespace, policy.name, policy.resource_version) from e
            metrics.api_call_total.labels(api_type="k8s", operation="update_iam_auth_policy", result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation="update_iam_auth_policy").observe(duration)
