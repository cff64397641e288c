"""Main entry point for the Lattice Auth Operator."""

from __future__ import annotations

import os
from typing import Any

import kopf

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .tracing import initialize_tracing


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Keep handler progress in annotations so status stays untouched
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30"))
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    # Metrics and health checks share one port
    health.start_metrics_server(int(os.getenv("METRICS_PORT", "8080")))


def main() -> None:
    """Run the operator.

    Watches the namespaces in WATCH_NAMESPACES (comma separated), or the
    whole cluster when it is unset.
    """
    namespaces = [ns.strip() for ns in os.getenv("WATCH_NAMESPACES", "").split(",") if ns.strip()]
    kopf.run(
        standalone=True,
        clusterwide=not namespaces,
        namespaces=namespaces,
    )


if __name__ == "__main__":
    main()
