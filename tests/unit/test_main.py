"""Tests for the operator entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import kopf

from lattice_auth_operator import main


class TestMain:
    """Test cases for main."""

    @patch("lattice_auth_operator.main.kopf.run")
    def test_clusterwide_by_default(self, mock_run, monkeypatch):
        """Test that the whole cluster is watched without WATCH_NAMESPACES."""
        monkeypatch.delenv("WATCH_NAMESPACES", raising=False)

        main.main()

        mock_run.assert_called_once_with(standalone=True, clusterwide=True, namespaces=[])

    @patch("lattice_auth_operator.main.kopf.run")
    def test_namespaced(self, mock_run, monkeypatch):
        """Test that WATCH_NAMESPACES limits the watched namespaces."""
        monkeypatch.setenv("WATCH_NAMESPACES", "team-a, team-b,")

        main.main()

        mock_run.assert_called_once_with(
            standalone=True, clusterwide=False, namespaces=["team-a", "team-b"]
        )


class TestConfigure:
    """Test cases for the startup handler."""

    @patch("lattice_auth_operator.main.health.start_metrics_server")
    @patch("lattice_auth_operator.main.initialize_tracing")
    @patch("lattice_auth_operator.main.structured_logging.setup_structured_logging")
    def test_configure_settings(self, mock_logging, mock_tracing, mock_server, monkeypatch):
        """Test that startup applies environment settings and starts the server."""
        monkeypatch.setenv("MAX_WORKERS", "8")
        monkeypatch.setenv("METRICS_PORT", "9100")
        settings = kopf.OperatorSettings()

        main.configure(settings=settings, logger=MagicMock())

        assert isinstance(settings.persistence.progress_storage, kopf.AnnotationsProgressStorage)
        assert isinstance(settings.persistence.diffbase_storage, kopf.AnnotationsDiffBaseStorage)
        assert settings.execution.max_workers == 8
        mock_server.assert_called_once_with(9100)
        mock_logging.assert_called_once()
        mock_tracing.assert_called_once()
