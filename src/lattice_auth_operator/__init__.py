"""Kubernetes operator reconciling IAMAuthPolicy resources onto Amazon VPC Lattice."""

__version__ = "0.1.0"
