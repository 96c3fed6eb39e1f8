"""AgentBill client.

Entry point tying the configuration, tracer, provider wrappers and signal
reporter together for one application.
"""

from __future__ import annotations

import logging
from typing import Any

from agentbill.config import Config, enable_debug_logging
from agentbill.errors import AgentBillError
from agentbill.exporters.collector import DEFAULT_EXPORT_TIMEOUT
from agentbill.instrumentation.openai import OpenAIWrapper
from agentbill.signals import DEFAULT_SIGNAL_TIMEOUT, Signal, SignalReporter
from agentbill.tracing.tracer import Tracer

logger = logging.getLogger(__name__)


class Client:
    """AgentBill SDK client.

    Usage:
        client = agentbill.init(api_key="ab-...", customer_id="customer-123")
        openai = client.wrap_openai()
        openai.chat_completion("gpt-4o-mini", [{"role": "user", "content": "Hi"}])
        client.track_signal(Signal(event_name="purchase", revenue=9.99))
        client.flush()
    """

    def __init__(self, config: Config, tracer: Tracer | None = None):
        self._config = config
        self._tracer = tracer or Tracer(config)
        self._signals = SignalReporter(config)
        if config.debug:
            enable_debug_logging()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    def wrap_openai(self, **kwargs: Any) -> OpenAIWrapper:
        """Return an OpenAI wrapper that records spans on this client."""
        return OpenAIWrapper(self._tracer, **kwargs)

    def track_signal(self, signal: Signal, timeout: float = DEFAULT_SIGNAL_TIMEOUT) -> bool:
        return self._signals.track(signal, timeout=timeout)

    def flush(self, timeout: float = DEFAULT_EXPORT_TIMEOUT) -> int:
        """Send pending telemetry. See :meth:`Tracer.flush`."""
        return self._tracer.flush(timeout=timeout)

    def shutdown(self, timeout: float = DEFAULT_EXPORT_TIMEOUT) -> bool:
        """Flush once, logging instead of raising on failure."""
        try:
            self._tracer.flush(timeout=timeout)
        except AgentBillError as exc:
            logger.error(
                "AgentBill shutdown flush failed, %d span(s) not sent: %s",
                len(self._tracer), exc,
            )
            return False
        return True


def init(config: Config | None = None, **kwargs: Any) -> Client:
    """Create a client from a :class:`Config` or its keyword fields."""
    if config is None:
        config = Config(**kwargs)
    elif kwargs:
        config = Config(**{**config.model_dump(), **kwargs})
    return Client(config)
