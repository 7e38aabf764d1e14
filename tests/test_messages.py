from yandexgpt_chat import (
    AIMessage,
    ChatGeneration,
    ChatMessage,
    HumanMessage,
    SystemMessage,
    TokenUsage,
)


def test_message_type_tags() -> None:
    assert HumanMessage("a").type == "human"
    assert AIMessage("a").type == "ai"
    assert SystemMessage("a").type == "system"
    assert ChatMessage("a", role="tool").type == "chat"


def test_messages_compare_by_kind() -> None:
    assert HumanMessage("a") == HumanMessage("a")
    assert HumanMessage("a") != AIMessage("a")


def test_generation_text_defaults_to_message_content() -> None:
    generation = ChatGeneration(message=AIMessage("hello"))
    assert generation.text == "hello"


def test_token_usage_from_dict() -> None:
    assert TokenUsage.from_dict({"total_tokens": 7}).total_tokens == 7
    assert TokenUsage.from_dict({}).total_tokens == 0
