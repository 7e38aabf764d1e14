from __future__ import annotations

import asyncio

import pytest

from yandexgpt_chat import CallCancelledError, HumanMessage, Trace
from yandexgpt_chat.chat_models import FakeChatModel, FakeRule

MESSAGES = [HumanMessage("hello")]


class TestFakeChatModel:
    def test_script_returns_in_order(self) -> None:
        model = FakeChatModel(script=["first", "second"])
        assert model.invoke(MESSAGES).content == "first"
        assert model.invoke(MESSAGES).content == "second"

    def test_empty_raises(self) -> None:
        model = FakeChatModel()
        with pytest.raises(RuntimeError, match="no matching rule or remaining script"):
            model.invoke(MESSAGES)

    def test_rule_substring_match(self) -> None:
        model = FakeChatModel()
        model.add_rule("hello", "matched!")
        assert model.invoke(MESSAGES).content == "matched!"

    def test_rule_regex_match(self) -> None:
        model = FakeChatModel()
        model.add_rule(r"hel+o", "regex!", regex=True)
        assert model.invoke(MESSAGES).content == "regex!"

    def test_rule_once_removed_after_use(self) -> None:
        model = FakeChatModel(script=["fallback"])
        model.add_rule("hello", "once!", once=True)
        assert model.invoke(MESSAGES).content == "once!"
        assert model.invoke(MESSAGES).content == "fallback"

    def test_rules_from_constructor(self) -> None:
        rule = FakeRule(matcher=lambda p: "hello" in p, response="from_init", total_tokens=9)
        model = FakeChatModel(rules=[rule])
        result = model.generate([MESSAGES])
        assert result.generations[0][0].text == "from_init"
        assert result.llm_output == {"total_tokens": 9}

    def test_batch_combines_usage(self) -> None:
        trace = Trace(steps=[])
        model = FakeChatModel(script=["aaaa", "bbbb"], trace=trace)
        result = model.generate([MESSAGES, MESSAGES])
        assert result.llm_output == {"total_tokens": trace.total_tokens}
        assert [step.step_id for step in trace.steps] == [1, 2]
        assert all(step.llm_type == "fake" for step in trace.steps)

    def test_cancelled_signal(self) -> None:
        model = FakeChatModel(script=["x"])

        async def run() -> None:
            signal = asyncio.Event()
            signal.set()
            await model.ainvoke(MESSAGES, signal=signal)

        with pytest.raises(CallCancelledError):
            asyncio.run(run())
