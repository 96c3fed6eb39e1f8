"""AgentBill error types.

Every failure the SDK surfaces derives from :class:`AgentBillError` so
callers can guard a telemetry call with a single ``except`` clause.
"""

from __future__ import annotations


class AgentBillError(Exception):
    """Base class for all AgentBill SDK errors."""


class ConfigurationError(AgentBillError):
    """A required setting or credential is missing or invalid."""


class PayloadEncodeError(AgentBillError):
    """An outbound payload could not be serialized to JSON."""


class RequestBuildError(AgentBillError):
    """An outbound HTTP request could not be constructed."""


class TransportError(AgentBillError):
    """The request failed on the network (connection error, timeout)."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class ResponseDecodeError(AgentBillError):
    """A response body was not the JSON document that was expected."""


class ExportError(AgentBillError):
    """Flushing buffered spans to the collector failed.

    The spans stay buffered and are sent again by the next flush.
    """


class ExportRejectedError(ExportError):
    """The collector answered with a non-success status code."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Collector returned status {status_code}")
        self.status_code = status_code
        self.body = body


class ProviderError(AgentBillError):
    """The wrapped AI provider answered with a non-success status code."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
