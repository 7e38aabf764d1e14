from .base import BaseChatModel
from .fake import FakeChatModel, FakeRule
from .yandex import ChatYandexGPT, parse_chat_history

__all__ = [
    "BaseChatModel",
    "FakeChatModel",
    "FakeRule",
    "ChatYandexGPT",
    "parse_chat_history",
]
