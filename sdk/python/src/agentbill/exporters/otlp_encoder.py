"""AgentBill OTLP JSON encoder.

Turns spans into the ``resourceSpans`` document accepted by OTLP/HTTP JSON
ingestion::

    resourceSpans[0]
      resource.attributes   service.name, service.version
      scopeSpans[0]
        scope               {name, version}
        spans               one entry per span, input order

Timestamps are rendered as decimal strings, as the OTLP JSON mapping does
for 64-bit integers.
"""

from __future__ import annotations

import time
from typing import Any, Mapping, Sequence

from agentbill.semantic_conventions.resource import AgentBillResource
from agentbill.tracing.span import AttributeValue, Span, SpanData

# SPAN_KIND_INTERNAL
SPAN_KIND = 1


def _encode_attributes(attributes: Mapping[str, Any]) -> list[dict[str, Any]]:
    return [
        {"key": key, "value": AttributeValue.of(value).to_otlp()}
        for key, value in attributes.items()
    ]


def _resource_attributes() -> list[dict[str, Any]]:
    return _encode_attributes({
        AgentBillResource.SERVICE_NAME: AgentBillResource.SERVICE_NAME_VALUE,
        AgentBillResource.SERVICE_VERSION: AgentBillResource.SERVICE_VERSION_VALUE,
    })


def encode_span(span: Span | SpanData) -> dict[str, Any]:
    """Encode one span. Open spans get the current time as end time."""
    data = span.snapshot() if isinstance(span, Span) else span

    end_time = data.end_time or max(time.time_ns(), data.start_time)

    status: dict[str, Any] = {"code": int(data.status.code)}
    if data.status.message:
        status["message"] = data.status.message

    return {
        "traceId": data.trace_id,
        "spanId": data.span_id,
        "name": data.name,
        "kind": SPAN_KIND,
        "startTimeUnixNano": str(data.start_time),
        "endTimeUnixNano": str(end_time),
        "attributes": _encode_attributes(data.attributes),
        "status": status,
    }


def encode_spans(spans: Sequence[Span | SpanData]) -> dict[str, Any]:
    """Build the export document for a batch of spans."""
    return {
        "resourceSpans": [
            {
                "resource": {"attributes": _resource_attributes()},
                "scopeSpans": [
                    {
                        "scope": {
                            "name": AgentBillResource.SCOPE_NAME,
                            "version": AgentBillResource.SCOPE_VERSION,
                        },
                        "spans": [encode_span(span) for span in spans],
                    }
                ],
            }
        ]
    }
