"""AgentBill provider wrappers.

Each wrapper calls an AI provider's API and records the call as a span on
the client's tracer.
"""

from agentbill.instrumentation.openai import OpenAIWrapper

__all__ = ["OpenAIWrapper"]
