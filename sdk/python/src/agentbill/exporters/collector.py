"""AgentBill collector exporter.

Sends one OTLP JSON document per flush to the AgentBill collector
endpoint. Only HTTP 200 counts as accepted; every other outcome raises so
the tracer keeps the batch buffered.
"""

from __future__ import annotations

import logging
from typing import Sequence

from agentbill._http import post_json
from agentbill.config import Config
from agentbill.errors import ExportRejectedError
from agentbill.exporters.otlp_encoder import encode_spans
from agentbill.tracing.span import SpanData

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_TIMEOUT = 10.0

# Maximum response body kept on an ExportRejectedError
_MAX_ERROR_BODY = 1024


class CollectorExporter:
    """POSTs encoded span batches to ``{base_url}/functions/v1/otel-collector``.

    Usage:
        exporter = CollectorExporter.from_config(config)
        exporter.export([span.snapshot() for span in spans])
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: float = DEFAULT_EXPORT_TIMEOUT,
    ):
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> CollectorExporter:
        return cls(endpoint=config.collector_url, api_key=config.api_key)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def export(self, spans: Sequence[SpanData], timeout: float | None = None) -> None:
        """Export ``spans`` as one batch.

        Raises :class:`~agentbill.errors.ExportRejectedError` on a non-200
        status and lets transport-level errors propagate.
        """
        document = encode_spans(spans)
        result = post_json(
            self._endpoint,
            document,
            bearer_token=self._api_key,
            timeout=timeout if timeout is not None else self._timeout,
        )
        logger.debug("AgentBill flush: %d", result.status)
        if result.status != 200:
            raise ExportRejectedError(result.status, result.text()[:_MAX_ERROR_BODY])
