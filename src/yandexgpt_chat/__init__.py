"""YandexGPT chat model adapter for a generic chat-model calling convention."""

__version__ = "0.1.0"

from .chat_models import BaseChatModel, ChatYandexGPT, FakeChatModel, parse_chat_history
from .errors import (
    CallCancelledError,
    ConfigurationError,
    ResponseFormatError,
    TransportError,
    YandexGPTError,
)
from .messages import (
    AIMessage,
    BaseMessage,
    ChatGeneration,
    ChatMessage,
    ChatResult,
    HumanMessage,
    LLMResult,
    SystemMessage,
    TokenUsage,
)
from .trace import Trace, TraceStep

__all__ = [
    "BaseChatModel",
    "ChatYandexGPT",
    "FakeChatModel",
    "parse_chat_history",
    "YandexGPTError",
    "ConfigurationError",
    "TransportError",
    "ResponseFormatError",
    "CallCancelledError",
    "BaseMessage",
    "HumanMessage",
    "AIMessage",
    "SystemMessage",
    "ChatMessage",
    "ChatGeneration",
    "ChatResult",
    "LLMResult",
    "TokenUsage",
    "Trace",
    "TraceStep",
]
