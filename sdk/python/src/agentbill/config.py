"""AgentBill SDK configuration.

The configuration is captured once when a client is created and never
changes afterwards; every component reads it from the same frozen model.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentbill.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://uenhjwdtnxtchlmqarjo.supabase.co"

COLLECTOR_PATH = "/functions/v1/otel-collector"
SIGNALS_PATH = "/functions/v1/record-signals"

# Localhost hosts allowed for HTTP (development only)
_DEV_HOSTS = {"localhost", "127.0.0.1", "::1"}

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Settings shared by the tracer, exporter, and signal reporter.

    Usage:
        config = Config(api_key="ab-...", customer_id="customer-123")
        config = Config.from_env(debug=True)
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., description="AgentBill API key (Bearer token)")
    base_url: str = Field(DEFAULT_BASE_URL, description="Collector base URL")
    customer_id: str = Field("", description="Customer attributed to all telemetry")
    debug: bool = Field(False, description="Print diagnostics to stderr")

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("api_key must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        """Default empty values and restrict the scheme to http(s)."""
        if not value:
            return DEFAULT_BASE_URL
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(
                f"Unsupported URL scheme '{parsed.scheme}'. Only http and https are allowed."
            )
        # Enforce HTTPS for non-local hosts; the API key is always sent
        if parsed.scheme == "http" and parsed.hostname not in _DEV_HOSTS:
            raise ValueError(
                "HTTPS is required when using API key authentication. "
                "Use https:// or connect to localhost for development."
            )
        if parsed.scheme == "http":
            logger.debug("Using plain HTTP endpoint %s", value)
        return value.rstrip("/")

    @property
    def collector_url(self) -> str:
        return f"{self.base_url}{COLLECTOR_PATH}"

    @property
    def signals_url(self) -> str:
        return f"{self.base_url}{SIGNALS_PATH}"

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Build a config from ``AGENTBILL_*`` environment variables.

        Keyword arguments take precedence over the environment.
        """
        values: dict[str, Any] = {}
        api_key = os.environ.get("AGENTBILL_API_KEY")
        if api_key:
            values["api_key"] = api_key
        base_url = os.environ.get("AGENTBILL_BASE_URL")
        if base_url:
            values["base_url"] = base_url
        customer_id = os.environ.get("AGENTBILL_CUSTOMER_ID")
        if customer_id:
            values["customer_id"] = customer_id
        debug = os.environ.get("AGENTBILL_DEBUG")
        if debug is not None:
            values["debug"] = debug.strip().lower() in _TRUE_VALUES
        values.update(overrides)

        if not values.get("api_key"):
            raise ConfigurationError(
                "AGENTBILL_API_KEY environment variable not set"
            )
        return cls(**values)


def enable_debug_logging() -> None:
    """Attach a stderr handler to the ``agentbill`` logger.

    Safe to call repeatedly; only one handler is ever installed.
    """
    root = logging.getLogger("agentbill")
    for handler in root.handlers:
        if getattr(handler, "_agentbill_debug", False):
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[AgentBill] %(levelname)s %(name)s: %(message)s"))
    handler._agentbill_debug = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
