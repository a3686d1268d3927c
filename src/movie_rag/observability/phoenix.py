"""
Phoenix start-up and shutdown.

init_phoenix() is called by the CLI before MovieAI.init(). It installs an
OpenTelemetry SDK provider exporting to Phoenix over OTLP/HTTP and turns on
OpenAI auto-instrumentation, so every embedding and chat call shows up as a
child of the movie_ai.answer span. Tracing is optional: when it is disabled
or the observability extra is missing the pipeline runs untraced.
"""

from __future__ import annotations

import logging
from typing import Any

from movie_rag.observability.config import PhoenixConfig, get_config, reset_config
from movie_rag.observability.tracer import reset_tracer

logger = logging.getLogger(__name__)

_provider: Any = None


def _start_provider(config: PhoenixConfig) -> Any:
    import phoenix as px
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    if config.is_remote:
        endpoint = config.traces_endpoint()
    else:
        session = px.launch_app()
        endpoint = config.traces_endpoint(session.url)
        logger.info(f"Phoenix UI available at: {session.url}")
    logger.info(f"Exporting spans for project {config.project_name!r} to {endpoint}")

    provider = TracerProvider(
        resource=Resource.create({"openinference.project.name": config.project_name})
    )
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)
    return provider


def init_phoenix(config: PhoenixConfig | None = None) -> bool:
    """
    Start exporting traces. Safe to call more than once.

    Returns:
        True if tracing is active, False if disabled or unavailable
    """
    global _provider
    if _provider is not None:
        return True

    config = config or get_config()
    if not config.enabled:
        logger.debug("Phoenix observability disabled")
        return False

    try:
        _provider = _start_provider(config)
    except ImportError as e:
        logger.warning(f"Phoenix not installed, observability disabled: {e}")
        return False
    except Exception as e:
        logger.error(f"Failed to initialize Phoenix: {e}")
        return False

    from movie_rag.observability.instrumentation import register_instrumentors

    register_instrumentors()
    # get_tracer() may have cached a NoOpTracer before the provider existed
    reset_tracer()
    return True


def shutdown_phoenix() -> None:
    """Flush pending spans and return to untraced mode."""
    global _provider
    if _provider is None:
        return

    from movie_rag.observability.instrumentation import uninstrument

    uninstrument()
    _provider.shutdown()
    _provider = None
    reset_tracer()
    reset_config()
