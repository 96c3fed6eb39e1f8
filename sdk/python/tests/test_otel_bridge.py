"""Tests for the OpenTelemetry SDK bridge exporter."""

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExportResult
from opentelemetry.trace import StatusCode, format_span_id, format_trace_id

from agentbill.config import Config
from agentbill.exporters.otel_bridge import AgentBillSpanExporter
from agentbill.tracing.tracer import Tracer


def _make_provider(tracer, flush_on_export=False):
    exporter = AgentBillSpanExporter(tracer, flush_on_export=flush_on_export)
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider, exporter


class TestAgentBillSpanExporter:
    def setup_method(self):
        self.tracer = Tracer(Config(api_key="test-key", customer_id="customer-123"))

    def test_converts_span(self):
        provider, _ = _make_provider(self.tracer)
        otel_tracer = provider.get_tracer("test")
        with otel_tracer.start_as_current_span(
            "openai.chat.completion", attributes={"model": "gpt-4o-mini", "latency_ms": 5}
        ) as otel_span:
            context = otel_span.get_span_context()

        [span] = self.tracer.pending
        assert span.name == "openai.chat.completion"
        assert span.trace_id == format_trace_id(context.trace_id)
        assert span.span_id == format_span_id(context.span_id)
        assert span.is_ended
        assert span.end_time >= span.start_time
        attrs = span.attributes
        assert attrs["model"] == "gpt-4o-mini"
        assert attrs["latency_ms"] == 5
        assert attrs["service.name"] == "agentbill-python-sdk"
        assert attrs["customer.id"] == "customer-123"
        assert span.status.code == 0

    def test_error_status(self):
        provider, _ = _make_provider(self.tracer)
        with provider.get_tracer("test").start_as_current_span("op") as otel_span:
            otel_span.set_status(StatusCode.ERROR, "upstream failed")

        [span] = self.tracer.pending
        assert span.status.code == 1
        assert span.status.message == "upstream failed"

    def test_flush_on_export(self, endpoint, config):
        tracer = Tracer(config)
        provider, _ = _make_provider(tracer, flush_on_export=True)
        with provider.get_tracer("test").start_as_current_span("op"):
            pass
        assert len(tracer) == 0
        assert endpoint.requests[0].path == "/functions/v1/otel-collector"

    def test_failed_flush_reports_failure_and_keeps_spans(self, endpoint, config):
        endpoint.status = 500
        tracer = Tracer(config)
        exporter = AgentBillSpanExporter(tracer)
        provider = TracerProvider()
        with provider.get_tracer("test").start_as_current_span("op") as otel_span:
            pass

        assert exporter.export([otel_span]) is SpanExportResult.FAILURE
        assert len(tracer) == 1

        endpoint.status = 200
        assert exporter.force_flush() is True
        assert len(tracer) == 0

    def test_unnamed_span_gets_placeholder(self):
        provider, _ = _make_provider(self.tracer)
        with provider.get_tracer("test").start_as_current_span(""):
            pass

        [span] = self.tracer.pending
        assert span.name == "unknown"

    def test_duplicate_export_skipped(self):
        exporter = AgentBillSpanExporter(self.tracer, flush_on_export=False)
        provider = TracerProvider()
        with provider.get_tracer("test").start_as_current_span("op") as otel_span:
            pass

        assert exporter.export([otel_span, otel_span]) is SpanExportResult.SUCCESS
        assert len(self.tracer) == 1
