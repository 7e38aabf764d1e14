from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
import re
from typing import Callable, Iterable

from ..errors import CallCancelledError
from ..messages import AIMessage, BaseMessage, ChatGeneration, ChatResult
from ..trace import Trace
from .base import BaseChatModel


def estimate_tokens(text: str) -> int:
    if not text:
        return 0
    return max(1, len(text) // 4)


@dataclass
class FakeRule:
    matcher: Callable[[str], bool]
    response: str
    once: bool = False
    total_tokens: int | None = None


class FakeChatModel(BaseChatModel):
    """Deterministic chat model for tests and examples."""

    def __init__(
        self,
        *,
        rules: Iterable[FakeRule] | None = None,
        script: Iterable[str] | None = None,
        trace: Trace | None = None,
    ) -> None:
        super().__init__(trace=trace)
        self._rules = list(rules or [])
        self._script = list(script or [])

    @property
    def _llm_type(self) -> str:
        return "fake"

    def add_rule(
        self,
        pattern: str,
        response: str,
        *,
        regex: bool = False,
        once: bool = False,
        total_tokens: int | None = None,
    ) -> None:
        if regex:

            def matcher(prompt: str) -> bool:
                return re.search(pattern, prompt) is not None
        else:

            def matcher(prompt: str) -> bool:
                return pattern in prompt

        self._rules.append(
            FakeRule(matcher=matcher, response=response, once=once, total_tokens=total_tokens)
        )

    def _result(self, prompt: str, response: str, total_tokens: int | None) -> ChatResult:
        if total_tokens is None:
            total_tokens = estimate_tokens(prompt) + estimate_tokens(response)
        return ChatResult(
            generations=[ChatGeneration(message=AIMessage(response))],
            llm_output={"total_tokens": total_tokens},
        )

    async def _agenerate(
        self,
        messages: Sequence[BaseMessage],
        *,
        signal: asyncio.Event | None = None,
    ) -> ChatResult:
        if signal is not None and signal.is_set():
            raise CallCancelledError("FakeChatModel call cancelled")

        prompt = "\n".join(msg.content for msg in messages)

        for rule in list(self._rules):
            if rule.matcher(prompt):
                if rule.once:
                    self._rules.remove(rule)
                return self._result(prompt, rule.response, rule.total_tokens)

        if self._script:
            return self._result(prompt, self._script.pop(0), None)

        raise RuntimeError("FakeChatModel has no matching rule or remaining script")
