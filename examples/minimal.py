"""
Minimal Chat Model Example
==========================

PURPOSE:
    Demonstrate the chat-model calling convention without a real API.

WHAT IT SHOWS:
    1. FakeChatModel: scripted responses in place of a remote model
    2. invoke(): one conversation in, one AIMessage out
    3. Trace: one step recorded per call

HOW TO RUN:
    uv run python examples/minimal.py

EXPECTED OUTPUT:
    Hello from the fake model
    Trace steps: 1
"""

from yandexgpt_chat import HumanMessage, SystemMessage, Trace
from yandexgpt_chat.chat_models import FakeChatModel


def main() -> None:
    trace = Trace(steps=[])
    model = FakeChatModel(script=["Hello from the fake model"], trace=trace)
    reply = model.invoke([SystemMessage("Be brief."), HumanMessage("Say hello.")])

    print(reply.content)
    print("Trace steps:", len(trace.steps))


if __name__ == "__main__":
    main()
