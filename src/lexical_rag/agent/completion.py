"""Generation collaborators: LangChain chat models and an offline fallback."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Protocol

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from loguru import logger

from lexical_rag.config import PipelineConfig, Settings
from lexical_rag.exceptions import GenerationError

_NUMBERED_LINE = re.compile(r"^(?P<num>\d+)\.\s+(?P<body>.+)$")

DECLINE_ANSWER = "无法在已索引知识中找到可验证的答案。"
UNCONFIGURED_ANSWER = "未配置对话模型，无法直接回答该问题。"


class ChatCompleter(Protocol):
    """Synchronous `complete(messages) -> text` capability."""

    def complete(self, messages: Sequence[BaseMessage]) -> str:
        """Return the model's reply to the message sequence."""


def create_chat_model(settings: Settings) -> Any:
    """Build a chat model for the OpenAI-compatible Ark endpoint.

    Returns None when the endpoint, key or model id is not configured.
    """

    if not settings.model_configured:
        return None

    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=settings.ark_model,
        api_key=settings.ark_api_key,
        base_url=settings.ark_base_url,
        temperature=0,
    )


class LangChainCompleter:
    """Adapts a LangChain chat model to the `ChatCompleter` contract."""

    def __init__(self, llm: Any) -> None:
        self.llm = llm

    def complete(self, messages: Sequence[BaseMessage]) -> str:
        try:
            response = self.llm.invoke(list(messages))
        except Exception as exc:
            logger.error(f"Chat model call failed: {exc}")
            raise GenerationError(f"chat model call failed: {exc}") from exc

        answer = _extract_content(response)
        if not answer.strip():
            raise GenerationError("chat model returned an empty response")
        return answer


class DeterministicCompleter:
    """Answers from the supplied knowledge context without a model.

    Each numbered knowledge line becomes one cited answer line. When the
    context holds only the no-knowledge placeholder, the completer declines;
    with no context message at all (direct route) it reports that no model is
    configured.
    """

    def __init__(self, config: PipelineConfig | None = None, max_entries: int = 3) -> None:
        self.config = config or PipelineConfig()
        self.max_entries = max_entries

    def complete(self, messages: Sequence[BaseMessage]) -> str:
        context = self._find_context(messages)
        if context is None:
            return UNCONFIGURED_ANSWER

        bodies: list[str] = []
        for line in context.splitlines():
            line = line.strip()
            if not line:
                continue
            match = _NUMBERED_LINE.match(line)
            # Entries are numbered 1..n; any other line continues the previous entry.
            if match and int(match.group("num")) == len(bodies) + 1:
                bodies.append(match.group("body").strip())
            elif bodies:
                bodies[-1] = f"{bodies[-1]} {line}"
        if not bodies:
            return DECLINE_ANSWER
        return "\n".join(
            f"{body} [{number}]"
            for number, body in enumerate(bodies[: self.max_entries], start=1)
        )

    def _find_context(self, messages: Sequence[BaseMessage]) -> str | None:
        header = self.config.context_header
        for message in messages:
            if not isinstance(message, SystemMessage):
                continue
            content = _extract_content(message)
            if content.startswith(header):
                return content[len(header) :]
        return None


def build_messages(system_prompts: Sequence[str], query: str) -> list[BaseMessage]:
    messages: list[BaseMessage] = [SystemMessage(content=prompt) for prompt in system_prompts]
    messages.append(HumanMessage(content=query))
    return messages


def _extract_content(response: Any) -> str:
    if isinstance(response, str):
        return response
    content = getattr(response, "content", response)
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                parts.append(str(item["text"]))
            else:
                parts.append(str(item))
        return " ".join(parts).strip()
    return str(content)
