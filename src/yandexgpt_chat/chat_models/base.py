from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Sequence
from typing import Any

from ..messages import AIMessage, BaseMessage, ChatResult, LLMResult, TokenUsage
from ..trace import Trace, TraceStep


class BaseChatModel(ABC):
    """Generic chat-model calling convention.

    Concrete models implement ``_agenerate`` for a single conversation; the
    base class handles batching, output combination and tracing.
    """

    def __init__(self, *, trace: Trace | None = None) -> None:
        self.trace = trace

    @property
    @abstractmethod
    def _llm_type(self) -> str: ...

    @abstractmethod
    async def _agenerate(
        self,
        messages: Sequence[BaseMessage],
        *,
        signal: asyncio.Event | None = None,
    ) -> ChatResult: ...

    def _combine_llm_outputs(self, llm_outputs: list[dict[str, Any] | None]) -> dict[str, Any]:
        total = 0
        for output in llm_outputs:
            if output:
                total += int(output.get("total_tokens", 0) or 0)
        return {"total_tokens": total}

    def _record(
        self,
        messages: Sequence[BaseMessage],
        result: ChatResult | None,
        error: Exception | None,
    ) -> None:
        if self.trace is None:
            return
        usage = None
        if result is not None and result.llm_output:
            usage = TokenUsage.from_dict(result.llm_output)
        self.trace.add(
            TraceStep(
                step_id=self.trace.next_step_id(),
                llm_type=self._llm_type,
                message_count=len(messages),
                usage=usage,
                error=f"{type(error).__name__}: {error}" if error else None,
            )
        )

    async def agenerate(
        self,
        batch: Sequence[Sequence[BaseMessage]],
        *,
        signal: asyncio.Event | None = None,
    ) -> LLMResult:
        generations = []
        llm_outputs = []
        for messages in batch:
            try:
                result = await self._agenerate(messages, signal=signal)
            except Exception as e:
                self._record(messages, None, e)
                raise
            self._record(messages, result, None)
            generations.append(result.generations)
            llm_outputs.append(result.llm_output)
        return LLMResult(generations=generations, llm_output=self._combine_llm_outputs(llm_outputs))

    async def ainvoke(
        self,
        messages: Sequence[BaseMessage],
        *,
        signal: asyncio.Event | None = None,
    ) -> AIMessage:
        result = await self.agenerate([messages], signal=signal)
        return result.generations[0][0].message

    def generate(self, batch: Sequence[Sequence[BaseMessage]]) -> LLMResult:
        return asyncio.run(self.agenerate(batch))

    def invoke(self, messages: Sequence[BaseMessage]) -> AIMessage:
        return asyncio.run(self.ainvoke(messages))
