"""
YandexGPT Example
=================

PURPOSE:
    Call the YandexGPT chat endpoint with a system instruction and a short
    conversation.

REQUIRED ENVIRONMENT VARIABLES (one of):
    YC_API_KEY      Static API key (sent as "Api-Key <key>")
    YC_IAM_TOKEN    IAM token (sent as "Bearer <token>")

OPTIONAL ENVIRONMENT VARIABLES:
    YC_MODEL        Model name (default: general)
    LOG_LEVEL       Logging level (default: INFO)

HOW TO RUN:
    YC_API_KEY=... uv run python examples/yandex_example.py
"""

import logging
import os

from yandexgpt_chat import AIMessage, ChatYandexGPT, HumanMessage, SystemMessage, Trace


def main() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    trace = Trace(steps=[])
    model = ChatYandexGPT(
        model=os.getenv("YC_MODEL", "general"),
        temperature=0.3,
        max_tokens=500,
        trace=trace,
    )
    history = [
        SystemMessage("You are a concise travel assistant."),
        HumanMessage("I have one day in Kazan."),
        AIMessage("Start at the Kremlin, then walk Bauman Street."),
        HumanMessage("What should I eat?"),
    ]
    reply = model.invoke(history)

    print(reply.content)
    print("Total tokens:", trace.total_tokens)


if __name__ == "__main__":
    main()
