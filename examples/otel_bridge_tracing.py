"""AgentBill Example: Reporting OpenTelemetry spans to AgentBill.

Applications already instrumented with the OpenTelemetry SDK can send
their spans to the AgentBill collector by adding one span processor.

Run:
    pip install agentbill
    export AGENTBILL_API_KEY=ab-...
    python otel_bridge_tracing.py
"""

from __future__ import annotations

import time

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

import agentbill
from agentbill import AgentBillSpanExporter, Config


def main() -> None:
    client = agentbill.init(Config.from_env(debug=True))

    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(AgentBillSpanExporter(client.tracer)))
    tracer = provider.get_tracer("support-bot")

    with tracer.start_as_current_span("anthropic.messages.create") as span:
        span.set_attribute("model", "claude-haiku-4-5")
        span.set_attribute("provider", "anthropic")
        started = time.monotonic()
        time.sleep(0.05)  # stands in for the provider call
        span.set_attribute("latency_ms", int((time.monotonic() - started) * 1000))
        span.set_attribute("response.total_tokens", 128)

    # Exports remaining spans through AgentBillSpanExporter.shutdown()
    provider.shutdown()


if __name__ == "__main__":
    main()
