from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, TypedDict


@dataclass(frozen=True)
class BaseMessage:
    content: str
    type: ClassVar[str] = "base"


@dataclass(frozen=True)
class HumanMessage(BaseMessage):
    type: ClassVar[str] = "human"


@dataclass(frozen=True)
class AIMessage(BaseMessage):
    type: ClassVar[str] = "ai"


@dataclass(frozen=True)
class SystemMessage(BaseMessage):
    type: ClassVar[str] = "system"


@dataclass(frozen=True)
class ChatMessage(BaseMessage):
    """Message with an arbitrary role label."""

    role: str = "user"
    type: ClassVar[str] = "chat"


class ParsedMessage(TypedDict):
    role: Literal["user", "assistant"]
    text: str


@dataclass(frozen=True)
class TokenUsage:
    total_tokens: int

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "TokenUsage":
        return cls(total_tokens=int(data.get("total_tokens", 0) or 0))

    def to_dict(self) -> dict[str, int]:
        return {"total_tokens": self.total_tokens}


@dataclass
class ChatGeneration:
    message: AIMessage
    text: str = ""
    generation_info: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.text:
            self.text = self.message.content


@dataclass
class ChatResult:
    generations: list[ChatGeneration]
    llm_output: dict[str, Any] | None = None


@dataclass
class LLMResult:
    """Batch result: one list of generations per input conversation."""

    generations: list[list[ChatGeneration]] = field(default_factory=list)
    llm_output: dict[str, Any] | None = None
