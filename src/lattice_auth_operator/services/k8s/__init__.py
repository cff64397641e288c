"""Kubernetes access for IAMAuthPolicy resources."""

from .store import AuthPolicyStore

__all__ = ["AuthPolicyStore"]
