"""AgentBill Semantic Conventions.

Attribute keys and resource identity values shared by the tracer, the
OTLP encoder, and the provider wrappers.
"""

from agentbill.semantic_conventions.attributes import SpanAttributes, SpanNames
from agentbill.semantic_conventions.resource import AgentBillResource

__all__ = [
    "SpanAttributes",
    "SpanNames",
    "AgentBillResource",
]
