"""Prometheus monitoring configuration with duplicate-registration guard.

Instrumentation registers collectors in the process-wide registry, so it is applied at most
once per process even when several app instances are created.
"""

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

_metrics_configured = False


def setup_monitoring(app: FastAPI) -> None:
    """Attach Prometheus instrumentation and expose `/metrics` once per process."""
    global _metrics_configured
    if _metrics_configured or getattr(app.state, "metrics_enabled", False):
        return

    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/livez", "/readyz", "/docs", "/openapi.json"],
        inprogress_name="farm_market_inprogress",
        inprogress_labels=True,
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, include_in_schema=False)

    app.state.metrics_enabled = True
    _metrics_configured = True
