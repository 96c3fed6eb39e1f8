"""AgentBill Exporters.

Encodes buffered spans as OTLP JSON and delivers them to the AgentBill
collector. :class:`AgentBillSpanExporter` connects a standard OpenTelemetry
``TracerProvider`` to the same pipeline.
"""

from agentbill.exporters.collector import CollectorExporter
from agentbill.exporters.otel_bridge import AgentBillSpanExporter
from agentbill.exporters.otlp_encoder import encode_span, encode_spans

__all__ = [
    "CollectorExporter",
    "AgentBillSpanExporter",
    "encode_span",
    "encode_spans",
]
