"""Liveness, readiness and metrics endpoints for the operator."""

import json
import threading
from typing import Any

from prometheus_client import make_wsgi_app
from werkzeug.wrappers import Request, Response

_ready = threading.Event()


def set_ready(ready: bool = True) -> None:
    """Mark the operator as ready (or not) to reconcile resources."""
    if ready:
        _ready.set()
    else:
        _ready.clear()


def is_ready() -> bool:
    return _ready.is_set()


def _json_response(payload: dict[str, Any], status: int) -> Response:
    return Response(json.dumps(payload), mimetype="application/json", status=status)


def create_combined_wsgi_app() -> Any:
    """Create a WSGI app serving /healthz, /readyz and Prometheus metrics.

    /readyz answers 503 until startup configuration has completed; every
    other path is delegated to the Prometheus exposition app.
    """
    metrics_app = make_wsgi_app()

    def combined_app(environ: dict[str, Any], start_response: Any) -> Any:
        path = Request(environ).path

        if path == "/healthz":
            response = _json_response({"status": "ok"}, 200)
        elif path == "/readyz":
            if is_ready():
                response = _json_response({"status": "ready"}, 200)
            else:
                response = _json_response({"status": "starting"}, 503)
        else:
            return metrics_app(environ, start_response)
        return response(environ, start_response)

    return combined_app
