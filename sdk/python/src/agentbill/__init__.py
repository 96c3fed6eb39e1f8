"""AgentBill - usage telemetry for AI applications.

Traces calls to AI-model APIs (tokens, latency, status) and reports them,
together with custom revenue signals, to the AgentBill collector as
OTLP-shaped JSON. Spans are buffered in memory and sent when the
application calls :meth:`Client.flush`.
"""

import logging

from agentbill.version import __version__
from agentbill.client import Client, init
from agentbill.config import Config
from agentbill.errors import (
    AgentBillError,
    ConfigurationError,
    ExportError,
    ExportRejectedError,
    PayloadEncodeError,
    ProviderError,
    RequestBuildError,
    ResponseDecodeError,
    TransportError,
)
from agentbill.exporters import AgentBillSpanExporter, encode_spans
from agentbill.instrumentation import OpenAIWrapper
from agentbill.signals import Signal
from agentbill.tracing import Span, SpanStatusCode
from agentbill.tracing.tracer import Tracer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "init",
    "Config",
    "Tracer",
    "Span",
    "SpanStatusCode",
    "Signal",
    "OpenAIWrapper",
    "AgentBillSpanExporter",
    "encode_spans",
    "AgentBillError",
    "ConfigurationError",
    "ExportError",
    "ExportRejectedError",
    "PayloadEncodeError",
    "ProviderError",
    "RequestBuildError",
    "ResponseDecodeError",
    "TransportError",
    "__version__",
]
