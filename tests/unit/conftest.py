"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def mock_kopf_event():
    """kopf.event needs a running operator; record calls instead."""
    with patch("lattice_auth_operator.utils.events.kopf.event") as mock_event:
        yield mock_event
