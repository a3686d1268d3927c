"""
Tracer factory with a no-op fallback.

get_tracer() hands out an OpenTelemetry-backed tracer once init_phoenix()
has installed an SDK provider, and a NoOpTracer in every other case:
PHOENIX_ENABLED unset, the observability extra missing, or init_phoenix()
not yet called. Pipeline code never checks which one it got.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from movie_rag.observability.attributes import RETRIEVAL_TIER_STATUS


class SpanProtocol(Protocol):
    """The span operations the pipeline uses."""

    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def set_status(self, status: str, description: str | None = None) -> None:
        """status is "ok" or "error"."""
        ...

    def record_exception(self, exception: BaseException) -> None:
        ...


class TracerProtocol(Protocol):
    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[SpanProtocol]:
        ...


# ---------------------------------------------------------------------------
# NOOP (tracing disabled)
# ---------------------------------------------------------------------------


class NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: str, description: str | None = None) -> None:
        pass

    def record_exception(self, exception: BaseException) -> None:
        pass


class NoOpTracer:
    """Yields NoOpSpans; costs one generator frame per span."""

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[NoOpSpan]:
        yield NoOpSpan()


# ---------------------------------------------------------------------------
# OTEL (tracing enabled)
# ---------------------------------------------------------------------------


class OTelSpan:
    def __init__(self, span: Any):
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, value)

    def set_status(self, status: str, description: str | None = None) -> None:
        from opentelemetry.trace import StatusCode

        self._span.set_status(StatusCode.OK if status == "ok" else StatusCode.ERROR, description)

    def record_exception(self, exception: BaseException) -> None:
        self._span.record_exception(exception)


class OTelTracer:
    def __init__(self, tracer: Any):
        self._tracer = tracer

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[OTelSpan]:
        with self._tracer.start_as_current_span(name, attributes=attributes) as span:
            yield OTelSpan(span)


def mark_tier_failed(span: SpanProtocol, error: BaseException) -> None:
    """Record a retrieval tier failure that the engine recovered from."""
    span.record_exception(error)
    span.set_attribute(RETRIEVAL_TIER_STATUS, "failed")
    span.set_status("error", str(error))


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------


_tracer: TracerProtocol | None = None


def _build_tracer(service_name: str) -> TracerProtocol:
    from movie_rag.observability.config import get_config

    if not get_config().enabled:
        return NoOpTracer()

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
    except ImportError:
        # observability extra not installed
        return NoOpTracer()

    if not isinstance(trace.get_tracer_provider(), TracerProvider):
        return NoOpTracer()
    return OTelTracer(trace.get_tracer(service_name))


def get_tracer(service_name: str = "movie-rag") -> TracerProtocol:
    """The process-wide tracer, built on first use."""
    global _tracer
    if _tracer is None:
        _tracer = _build_tracer(service_name)
    return _tracer


def reset_tracer() -> None:
    """Forget the cached tracer (init_phoenix and tests)."""
    global _tracer
    _tracer = None
