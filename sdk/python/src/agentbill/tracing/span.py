"""AgentBill span model.

A :class:`Span` is the mutable record of one traced operation. The tracer
owns every span in its buffer; callers get a live handle they may update
until the span is flushed. The encoder never reads a live span directly:
it works on the immutable :class:`SpanData` produced by
:meth:`Span.snapshot`.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Mapping

# Signed 64-bit integer range of the OTLP intValue
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

SPAN_ID_LENGTH = 16


class AttributeKind(Enum):
    """Value arms of an attribute, named after their OTLP JSON keys."""
    STRING = "stringValue"
    INT = "intValue"
    BOOL = "boolValue"


@dataclass(frozen=True)
class AttributeValue:
    """A span attribute value: string, 64-bit integer, or boolean.

    Anything else is stored as its ``str()`` form.
    """

    kind: AttributeKind
    value: str | int | bool

    @classmethod
    def of(cls, value: Any) -> AttributeValue:
        if isinstance(value, AttributeValue):
            return value
        # bool first: it is a subclass of int
        if isinstance(value, bool):
            return cls(AttributeKind.BOOL, value)
        if isinstance(value, int) and _INT64_MIN <= value <= _INT64_MAX:
            return cls(AttributeKind.INT, int(value))
        if isinstance(value, str):
            return cls(AttributeKind.STRING, value)
        return cls(AttributeKind.STRING, str(value))

    def to_otlp(self) -> dict[str, Any]:
        return {self.kind.value: self.value}


class SpanStatusCode(IntEnum):
    OK = 0
    ERROR = 1


@dataclass(frozen=True)
class SpanStatus:
    code: int = SpanStatusCode.OK
    message: str = ""


@dataclass(frozen=True)
class SpanData:
    """Immutable copy of a span, as handed to the encoder."""

    name: str
    trace_id: str
    span_id: str
    start_time: int
    end_time: int
    status: SpanStatus
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)


def generate_trace_id() -> str:
    """Return 128 random bits as 32 lowercase hex characters."""
    return uuid.uuid4().hex


def generate_span_id() -> str:
    return uuid.uuid4().hex[:SPAN_ID_LENGTH]


class Span:
    """One traced operation.

    Attribute, status, and end-time updates are serialized by a per-span
    lock, so a handle can be shared between threads.

    Usage:
        span = tracer.start_span("openai.chat.completion", {"model": "gpt-4o-mini"})
        span.set_attribute("latency_ms", 120)
        span.set_status(SpanStatusCode.OK)
        span.end()
    """

    def __init__(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        *,
        trace_id: str | None = None,
        span_id: str | None = None,
        start_time: int | None = None,
    ):
        if not name:
            raise ValueError("Span name must not be empty")
        self._name = name
        self._trace_id = trace_id or generate_trace_id()
        self._span_id = span_id or generate_span_id()
        self._start_time = start_time if start_time is not None else time.time_ns()
        self._end_time = 0
        self._status = SpanStatus()
        self._attributes: dict[str, AttributeValue] = {}
        self._lock = threading.Lock()
        if attributes:
            self.set_attributes(attributes)

    def __repr__(self) -> str:
        return f"Span(name={self._name!r}, span_id={self._span_id!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def trace_id(self) -> str:
        return self._trace_id

    @property
    def span_id(self) -> str:
        return self._span_id

    @property
    def start_time(self) -> int:
        return self._start_time

    @property
    def end_time(self) -> int:
        """End timestamp in nanoseconds, ``0`` while the span is open."""
        return self._end_time

    @property
    def is_ended(self) -> bool:
        return self._end_time != 0

    @property
    def status(self) -> SpanStatus:
        return self._status

    @property
    def attributes(self) -> dict[str, Any]:
        """Plain-value copy of the current attributes."""
        with self._lock:
            return {key: attr.value for key, attr in self._attributes.items()}

    def set_attribute(self, key: str, value: Any) -> None:
        attr = AttributeValue.of(value)
        with self._lock:
            self._attributes[key] = attr

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        converted = {key: AttributeValue.of(value) for key, value in attributes.items()}
        with self._lock:
            self._attributes.update(converted)

    def set_status(self, code: int, message: str = "") -> None:
        """Replace the status. ``0`` is ok, ``1`` is error; others pass through."""
        status = SpanStatus(int(code), message or "")
        with self._lock:
            self._status = status

    def end(self, end_time: int | None = None) -> None:
        """Record the end time. Only the first call has an effect."""
        with self._lock:
            if self._end_time:
                return
            now = end_time if end_time is not None else time.time_ns()
            self._end_time = max(now, self._start_time)

    def snapshot(self) -> SpanData:
        with self._lock:
            return SpanData(
                name=self._name,
                trace_id=self._trace_id,
                span_id=self._span_id,
                start_time=self._start_time,
                end_time=self._end_time,
                status=self._status,
                attributes=MappingProxyType(dict(self._attributes)),
            )
