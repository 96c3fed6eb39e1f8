"""AgentBill Example: Tracked OpenAI chat completion.

Wraps one OpenAI chat completion so its model, latency and token usage are
recorded as a span, reports a revenue signal for the answered question, and
flushes both to AgentBill.

Run:
    pip install agentbill
    export OPENAI_API_KEY=sk-...
    export AGENTBILL_API_KEY=ab-...
    python openai_basic.py
"""

from __future__ import annotations

import sys

import agentbill
from agentbill import AgentBillError, Config, Signal


def main() -> int:
    config = Config.from_env(customer_id="customer-123", debug=True)

    with agentbill.init(config) as client:
        openai = client.wrap_openai()
        try:
            response = openai.chat_completion("gpt-4o-mini", [
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": "What is the capital of France?"},
            ])
        except AgentBillError as exc:
            # The failed call is still recorded on its span and flushed on exit.
            print(f"Chat completion failed: {exc}", file=sys.stderr)
            return 1

        print(response["choices"][0]["message"]["content"])
        client.track_signal(Signal(event_name="question_answered", revenue=0.05))

    return 0


if __name__ == "__main__":
    sys.exit(main())
