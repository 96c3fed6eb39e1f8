"""AgentBill revenue signals.

A signal is a custom business event (a purchase, a resolved ticket) with an
optional revenue amount, sent straight to the AgentBill signals endpoint.
Signals are not buffered: each :meth:`SignalReporter.track` call makes one
request.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import PydanticSerializationError

from agentbill._http import post_json
from agentbill.config import Config
from agentbill.errors import PayloadEncodeError

logger = logging.getLogger(__name__)

DEFAULT_SIGNAL_TIMEOUT = 10.0


class Signal(BaseModel):
    """A custom event with revenue.

    ``customer_id`` and ``timestamp`` are filled in by the reporter when the
    signal is sent.
    """
    event_name: str = Field(..., min_length=1)
    revenue: float = 0.0
    customer_id: str = ""
    timestamp: int = 0
    data: dict[str, Any] = Field(default_factory=dict)


class SignalReporter:
    """Sends signals to ``{base_url}/functions/v1/record-signals``."""

    def __init__(self, config: Config):
        self._config = config

    def track(self, signal: Signal, timeout: float = DEFAULT_SIGNAL_TIMEOUT) -> bool:
        """Send one signal.

        Returns ``True`` when the endpoint accepted it and ``False`` for any
        other HTTP status. Transport failures raise
        :class:`~agentbill.errors.TransportError`; data that cannot be
        serialized raises :class:`~agentbill.errors.PayloadEncodeError`.
        """
        outgoing = signal.model_copy(
            update={
                "customer_id": self._config.customer_id,
                "timestamp": int(time.time()),
            }
        )
        try:
            body = outgoing.model_dump(mode="json")
        except PydanticSerializationError as exc:
            raise PayloadEncodeError(f"Could not encode signal {outgoing.event_name!r}: {exc}") from exc

        result = post_json(
            self._config.signals_url,
            body,
            bearer_token=self._config.api_key,
            timeout=timeout,
        )
        if not result.ok:
            logger.warning(
                "Signal %s rejected with status %d", outgoing.event_name, result.status,
            )
            return False

        logger.debug(
            "Signal tracked: %s, revenue: $%.2f", outgoing.event_name, outgoing.revenue,
        )
        return True
