"""AgentBill OpenAI Chat Completions wrapper.

Calls the OpenAI Chat Completions REST endpoint and records one
``openai.chat.completion`` span per call with the model, latency and token
usage. The span is ended on every path; failures mark it with status ``1``
and the error text before the error is raised to the caller.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any, Mapping, Sequence

from agentbill._http import post_json
from agentbill.errors import ConfigurationError, ProviderError, ResponseDecodeError
from agentbill.semantic_conventions.attributes import SpanAttributes, SpanNames
from agentbill.tracing.span import Span, SpanStatusCode
from agentbill.tracing.tracer import Tracer

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_TIMEOUT = 30.0

_USAGE_ATTRIBUTES = {
    "prompt_tokens": SpanAttributes.PROMPT_TOKENS,
    "completion_tokens": SpanAttributes.COMPLETION_TOKENS,
    "total_tokens": SpanAttributes.TOTAL_TOKENS,
}


def _record_usage(span: Span, response: Mapping[str, Any]) -> None:
    usage = response.get("usage")
    if not isinstance(usage, Mapping):
        return
    for field, attribute in _USAGE_ATTRIBUTES.items():
        value = usage.get(field)
        # JSON numbers may decode as float; bools are not token counts
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            span.set_attribute(attribute, int(value))


class OpenAIWrapper:
    """Tracked access to OpenAI chat completions.

    Usage:
        openai = client.wrap_openai()
        response = openai.chat_completion("gpt-4o-mini", [
            {"role": "system", "content": "You are a helpful assistant."},
            {"role": "user", "content": "What is the capital of France?"},
        ])
    """

    def __init__(
        self,
        tracer: Tracer,
        api_key: str | None = None,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        timeout: float = DEFAULT_OPENAI_TIMEOUT,
    ):
        self._tracer = tracer
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _resolve_api_key(self) -> str:
        api_key = self._api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable not set")
        return api_key

    def chat_completion(
        self,
        model: str,
        messages: Sequence[Mapping[str, str]],
        **params: Any,
    ) -> dict[str, Any]:
        """Create a chat completion and return the decoded response.

        Extra keyword arguments (``temperature``, ``max_tokens``, ...) are
        sent as request fields.
        """
        started = time.monotonic()
        with self._tracer.span(
            SpanNames.OPENAI_CHAT_COMPLETION,
            {
                SpanAttributes.MODEL: model,
                SpanAttributes.PROVIDER: SpanAttributes.Provider.OPENAI,
            },
        ) as span:
            try:
                response = self._request(model, messages, params)
                _record_usage(span, response)
                span.set_status(SpanStatusCode.OK)
                return response
            finally:
                latency_ms = int((time.monotonic() - started) * 1000)
                span.set_attribute(SpanAttributes.LATENCY_MS, latency_ms)

    def _request(
        self,
        model: str,
        messages: Sequence[Mapping[str, str]],
        params: Mapping[str, Any],
    ) -> dict[str, Any]:
        api_key = self._resolve_api_key()
        body: dict[str, Any] = {
            "model": model,
            "messages": [dict(message) for message in messages],
        }
        body.update(params)

        result = post_json(
            f"{self._base_url}/chat/completions",
            body,
            bearer_token=api_key,
            timeout=self._timeout,
        )
        if result.status != 200:
            raise ProviderError(
                f"OpenAI API returned status: {result.status}",
                status_code=result.status,
            )

        try:
            response = json.loads(result.body)
        except ValueError as exc:
            raise ResponseDecodeError(f"Invalid JSON from OpenAI API: {exc}") from exc
        if not isinstance(response, dict):
            raise ResponseDecodeError("OpenAI API response is not a JSON object")
        return response
