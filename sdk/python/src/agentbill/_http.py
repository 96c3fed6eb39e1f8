"""JSON-over-HTTP POST helper shared by the exporter, signals, and wrappers."""

from __future__ import annotations

import http.client
import json
import logging
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Mapping

from agentbill.errors import PayloadEncodeError, RequestBuildError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResult:
    """Status and raw body of a completed HTTP exchange."""
    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


def post_json(
    url: str,
    payload: Any,
    *,
    bearer_token: str | None = None,
    timeout: float,
    headers: Mapping[str, str] | None = None,
) -> HTTPResult:
    """POST ``payload`` as JSON and return the response status and body.

    Every HTTP status, including 4xx/5xx, is returned as a result; only
    failures before a status is received raise.
    """
    try:
        data = json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise PayloadEncodeError(f"Could not encode request body: {exc}") from exc

    request_headers = {"Content-Type": "application/json"}
    if bearer_token:
        request_headers["Authorization"] = f"Bearer {bearer_token}"
    if headers:
        request_headers.update(headers)

    try:
        req = urllib.request.Request(
            url,
            data=data,
            headers=request_headers,
            method="POST",
        )
    except ValueError as exc:
        raise RequestBuildError(f"Invalid request URL {url!r}: {exc}") from exc

    ssl_context = ssl.create_default_context()

    try:
        with urllib.request.urlopen(req, timeout=timeout, context=ssl_context) as resp:
            return HTTPResult(status=resp.status, body=resp.read())
    except urllib.error.HTTPError as exc:
        try:
            body = exc.read() or b""
        finally:
            exc.close()
        return HTTPResult(status=exc.code, body=body)
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        reason = getattr(exc, "reason", exc)
        logger.debug("POST %s failed: %s", url, reason)
        raise TransportError(f"Request to {url} failed: {reason}", url=url) from exc
    except ValueError as exc:
        # http.client encodes request lines and headers as latin-1
        raise RequestBuildError(f"Could not send request to {url!r}: {exc}") from exc
