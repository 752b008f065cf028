"""Main entry point for the RDS DBCluster Operator."""

from __future__ import annotations

import os
import threading
from typing import Any

import kopf
from werkzeug.serving import make_server

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .tracing import initialize_tracing


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30.0"))
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    # Metrics and health check endpoints share one server
    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    server = make_server("", metrics_port, health.create_combined_wsgi_app(), threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    health.set_ready()


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Report not-ready while the operator drains."""
    health.set_ready(False)
