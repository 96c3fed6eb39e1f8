"""AgentBill span attribute and span name constants."""


class SpanAttributes:
    """Attribute keys recorded on AgentBill spans."""

    # Identity (injected by the tracer)
    SERVICE_NAME = "service.name"
    CUSTOMER_ID = "customer.id"

    # Request
    MODEL = "model"
    PROVIDER = "provider"

    # Timing
    LATENCY_MS = "latency_ms"

    # Usage reported by the provider
    PROMPT_TOKENS = "response.prompt_tokens"
    COMPLETION_TOKENS = "response.completion_tokens"
    TOTAL_TOKENS = "response.total_tokens"

    # Provider values
    class Provider:
        OPENAI = "openai"


class SpanNames:
    """Span names emitted by the bundled wrappers."""

    OPENAI_CHAT_COMPLETION = "openai.chat.completion"
