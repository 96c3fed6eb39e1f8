"""AgentBill span collector.

The :class:`Tracer` owns an in-memory buffer of spans for one client. Spans
are appended when they start and leave the buffer only when a flush has
been confirmed by the collector; a failed flush keeps every span for the
next attempt.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Generator, Mapping

from agentbill.config import Config
from agentbill.exporters.collector import DEFAULT_EXPORT_TIMEOUT, CollectorExporter
from agentbill.semantic_conventions.attributes import SpanAttributes
from agentbill.semantic_conventions.resource import AgentBillResource
from agentbill.tracing.span import Span, SpanStatusCode, generate_span_id

logger = logging.getLogger(__name__)


class Tracer:
    """Creates spans, tags them with the client identity, and flushes them.

    Usage:
        tracer = Tracer(Config(api_key="ab-..."))
        with tracer.span("embedding.create", {"model": "text-embedding-3-small"}) as span:
            span.set_attribute("latency_ms", 12)
        tracer.flush()
    """

    def __init__(self, config: Config, exporter: CollectorExporter | None = None):
        self._config = config
        self._exporter = exporter or CollectorExporter.from_config(config)
        self._spans: list[Span] = []
        self._span_ids: set[str] = set()
        self._lock = threading.Lock()
        self._flush_lock = threading.Lock()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def pending(self) -> list[Span]:
        """Spans buffered for the next flush, in start order."""
        with self._lock:
            return list(self._spans)

    def __len__(self) -> int:
        with self._lock:
            return len(self._spans)

    def _identity_attributes(self) -> dict[str, str]:
        attrs = {SpanAttributes.SERVICE_NAME: AgentBillResource.SERVICE_NAME_VALUE}
        if self._config.customer_id:
            attrs[SpanAttributes.CUSTOMER_ID] = self._config.customer_id
        return attrs

    def start_span(self, name: str, attributes: Mapping[str, Any] | None = None) -> Span:
        """Start a span and add it to the buffer.

        The caller's mapping is copied; the identity attributes override
        caller keys of the same name.
        """
        if not name:
            raise ValueError("Span name must not be empty")
        merged: dict[str, Any] = dict(attributes or {})
        merged.update(self._identity_attributes())
        with self._lock:
            span_id = generate_span_id()
            while span_id in self._span_ids:
                span_id = generate_span_id()
            span = Span(name, merged, span_id=span_id)
            self._span_ids.add(span_id)
            self._spans.append(span)
        return span

    def adopt(self, span: Span) -> Span:
        """Buffer a span created outside this tracer (e.g. by the OTel bridge).

        Raises ``ValueError`` when a buffered span already has the same
        ``span_id``.
        """
        with self._lock:
            if span.span_id in self._span_ids:
                raise ValueError(f"Span id {span.span_id} is already buffered")
            span.set_attributes(self._identity_attributes())
            self._span_ids.add(span.span_id)
            self._spans.append(span)
        return span

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
    ) -> Generator[Span, None, None]:
        """Context manager that ends the span and records errors.

        An exception raised inside the block sets status ``1`` with the
        exception text and is re-raised.
        """
        span = self.start_span(name, attributes)
        try:
            yield span
        except Exception as exc:
            span.set_status(SpanStatusCode.ERROR, str(exc) or type(exc).__name__)
            raise
        finally:
            span.end()

    def flush(self, timeout: float = DEFAULT_EXPORT_TIMEOUT) -> int:
        """Export every buffered span as one batch.

        Returns the number of spans exported (``0`` for an empty buffer,
        in which case no request is made). On any failure an
        :class:`~agentbill.errors.AgentBillError` is raised and the buffer
        is left untouched.
        """
        with self._flush_lock:
            with self._lock:
                batch = list(self._spans)
            if not batch:
                return 0

            try:
                self._exporter.export([span.snapshot() for span in batch], timeout=timeout)
            except Exception as exc:
                logger.warning(
                    "Flush of %d span(s) failed, keeping them buffered: %s",
                    len(batch), exc,
                )
                raise

            with self._lock:
                # Only this flush removes spans, so the batch is still the prefix.
                self._spans = self._spans[len(batch):]
                self._span_ids = {span.span_id for span in self._spans}
            logger.debug("Flushed %d span(s) to %s", len(batch), self._exporter.endpoint)
            return len(batch)
