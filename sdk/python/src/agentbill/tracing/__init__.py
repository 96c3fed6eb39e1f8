"""AgentBill span model.

The collector is :class:`agentbill.tracing.tracer.Tracer`.
"""

from agentbill.tracing.span import (
    AttributeKind,
    AttributeValue,
    Span,
    SpanData,
    SpanStatus,
    SpanStatusCode,
)

__all__ = [
    "AttributeKind",
    "AttributeValue",
    "Span",
    "SpanData",
    "SpanStatus",
    "SpanStatusCode",
]
