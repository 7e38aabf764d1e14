from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging
import os
import time
from typing import Any

import httpx

from ..errors import CallCancelledError, ConfigurationError, ResponseFormatError, TransportError
from ..messages import AIMessage, BaseMessage, ChatGeneration, ChatResult, ParsedMessage
from ..trace import Trace
from .base import BaseChatModel

logger = logging.getLogger(__name__)

API_URL = "https://llm.api.cloud.yandex.net/llm/v1alpha/chat"
API_KEY_ENV = "YC_API_KEY"
IAM_TOKEN_ENV = "YC_IAM_TOKEN"


def parse_chat_history(history: Sequence[BaseMessage]) -> tuple[list[ParsedMessage], str]:
    """Split a message history into conversational turns and an instruction.

    Human and AI messages become ``user``/``assistant`` turns in order. Each
    system message replaces the instruction, so the last one wins. Any other
    message kind is dropped.
    """
    chat_history: list[ParsedMessage] = []
    instruction = ""

    for message in history:
        if message.type == "human":
            chat_history.append({"role": "user", "text": message.content})
        elif message.type == "ai":
            chat_history.append({"role": "assistant", "text": message.content})
        elif message.type == "system":
            instruction = message.content

    return chat_history, instruction


class ChatYandexGPT(BaseChatModel):
    """Chat model backed by the YandexGPT ``v1alpha/chat`` endpoint.

    Credentials are resolved once here: explicit arguments first, then the
    ``YC_API_KEY`` / ``YC_IAM_TOKEN`` environment variables. When both are
    available the API key is used.

    Each call opens its own client and issues a single request::

        model = ChatYandexGPT(api_key="...")
        reply = model.invoke([SystemMessage("Be brief."), HumanMessage("Hi")])
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        iam_token: str | None = None,
        temperature: float = 0.6,
        max_tokens: int = 1700,
        model: str = "general",
        endpoint: str = API_URL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        trace: Trace | None = None,
    ) -> None:
        super().__init__(trace=trace)
        api_key = api_key or os.getenv(API_KEY_ENV) or None
        iam_token = iam_token or os.getenv(IAM_TOKEN_ENV) or None
        if api_key is None and iam_token is None:
            raise ConfigurationError(
                f"Please set the {API_KEY_ENV} or {IAM_TOKEN_ENV} environment variable "
                "or pass it to the constructor as the api_key or iam_token argument."
            )
        self.api_key = api_key
        self.iam_token = iam_token
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.model = model
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    @property
    def _llm_type(self) -> str:
        return "yandexgpt"

    def _combine_llm_outputs(self, llm_outputs: list[dict[str, Any] | None]) -> dict[str, Any]:
        return {}

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key is not None:
            headers["Authorization"] = f"Api-Key {self.api_key}"
        else:
            headers["Authorization"] = f"Bearer {self.iam_token}"
        return headers

    def build_payload(self, messages: Sequence[BaseMessage]) -> dict[str, Any]:
        message_history, instruction = parse_chat_history(messages)
        logger.debug(
            "parsed %d of %d messages, instruction=%s",
            len(message_history),
            len(messages),
            "yes" if instruction else "no",
        )
        return {
            "model": self.model,
            "generationOptions": {
                "temperature": self.temperature,
                "maxTokens": self.max_tokens,
            },
            "messages": message_history,
            "instructionText": instruction,
        }

    def parse_response(self, response: httpx.Response) -> ChatResult:
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError(
                f"Malformed JSON response from {self.endpoint}: {e}"
            ) from e

        try:
            result = data["result"]
            text = result["message"]["text"]
            # num_tokens may arrive as a numeric string
            total_tokens = int(result["num_tokens"])
        except (KeyError, TypeError, ValueError) as e:
            raise ResponseFormatError(
                f"Unexpected response structure from {self.endpoint}: {e}"
            ) from e
        if not isinstance(text, str):
            raise ResponseFormatError(
                f"Unexpected response structure from {self.endpoint}: "
                f"message text is {type(text).__name__}"
            )

        return ChatResult(
            generations=[ChatGeneration(message=AIMessage(text), text=text)],
            llm_output={"total_tokens": total_tokens},
        )

    async def _post(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, Any],
        signal: asyncio.Event | None,
    ) -> httpx.Response:
        """POST the payload, abandoning the request if ``signal`` fires first."""
        request = asyncio.ensure_future(
            client.post(self.endpoint, json=payload, headers=self.headers)
        )
        if signal is None:
            return await request

        cancelled = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {request, cancelled}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            pending = [task for task in (request, cancelled) if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if request in done:
            return request.result()
        raise CallCancelledError(f"Request to {self.endpoint} was cancelled")

    async def _agenerate(
        self,
        messages: Sequence[BaseMessage],
        *,
        signal: asyncio.Event | None = None,
    ) -> ChatResult:
        if signal is not None and signal.is_set():
            raise CallCancelledError(f"Request to {self.endpoint} was cancelled")

        payload = self.build_payload(messages)
        started = time.monotonic()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await self._post(client, payload, signal)
        elapsed = time.monotonic() - started
        logger.debug(
            "HTTP %d from %s in %.2fs",
            response.status_code,
            self.endpoint,
            elapsed,
        )

        if not response.is_success:
            logger.warning("YandexGPT returned HTTP %d", response.status_code)
            raise TransportError(self.endpoint, response.status_code)

        return self.parse_response(response)
