"""AgentBill OpenTelemetry SDK bridge.

OTel ``SpanExporter`` that feeds spans finished in a standard
OpenTelemetry ``TracerProvider`` into an AgentBill :class:`Tracer`, so code
already instrumented with OpenTelemetry reports to the AgentBill collector.

Usage:
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    client = agentbill.init(api_key="ab-...")
    provider = TracerProvider()
    provider.add_span_processor(
        BatchSpanProcessor(AgentBillSpanExporter(client.tracer))
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from opentelemetry.trace import StatusCode, format_span_id, format_trace_id

from agentbill.errors import AgentBillError
from agentbill.tracing.span import Span, SpanStatusCode

if TYPE_CHECKING:
    from agentbill.tracing.tracer import Tracer

logger = logging.getLogger(__name__)

UNNAMED_SPAN = "unknown"


def convert_span(readable: ReadableSpan) -> Span:
    """Build an AgentBill span carrying the OTel span's ids, timing and status."""
    context = readable.get_span_context()
    span = Span(
        readable.name or UNNAMED_SPAN,
        dict(readable.attributes or {}),
        trace_id=format_trace_id(context.trace_id) if context else None,
        span_id=format_span_id(context.span_id) if context else None,
        start_time=readable.start_time,
    )
    if readable.status.status_code is StatusCode.ERROR:
        span.set_status(SpanStatusCode.ERROR, readable.status.description or "")
    if readable.end_time:
        span.end(end_time=readable.end_time)
    return span


class AgentBillSpanExporter(SpanExporter):
    """Exports OTel spans through an AgentBill tracer.

    With ``flush_on_export`` (the default) every export call also flushes
    the tracer; a failed flush reports ``FAILURE`` and the spans stay
    buffered for the next export or flush.
    """

    def __init__(self, tracer: Tracer, flush_on_export: bool = True):
        self._tracer = tracer
        self._flush_on_export = flush_on_export

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for readable in spans:
            try:
                self._tracer.adopt(convert_span(readable))
            except ValueError as exc:
                logger.warning("Skipping span %r: %s", readable.name, exc)

        if not self._flush_on_export:
            return SpanExportResult.SUCCESS
        return SpanExportResult.SUCCESS if self._flush() else SpanExportResult.FAILURE

    def _flush(self, timeout: float | None = None) -> bool:
        try:
            if timeout is None:
                self._tracer.flush()
            else:
                self._tracer.flush(timeout=timeout)
        except AgentBillError as exc:
            logger.error("AgentBill export failed: %s", exc)
            return False
        return True

    def shutdown(self) -> None:
        self._flush()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._flush(timeout=timeout_millis / 1000)
