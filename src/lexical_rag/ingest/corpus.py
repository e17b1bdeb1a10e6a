"""Corpus loaders producing the document list for index building."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_DOCUMENTS: tuple[str, ...] = (
    "Eino 是字节跳动开源的通用 AI 应用开发框架。",
    "Eino 的 Stream 模式是通过 HTTP SSE（Server-Sent Events） 实现的，模型生成的每个 token 会被实时推送到客户端。",
    "Eino 提供了 Memory（记忆）、RAG（检索增强）、Tool（工具调用）等模块，帮助开发者快速构建智能体。",
    "Eino orchestration 能够用图编排的方式拼装节点，使复杂流程可视化、可复用。",
)


def normalize_document(text: str) -> str:
    """Collapse newlines and runs of whitespace into single spaces.

    A document is one numbered line in the assembled context, so it must not
    span lines.
    """
    return " ".join(text.split())


class CorpusParser(ABC):
    """Base parser turning one file into an ordered list of documents."""

    extensions: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, path: Path) -> list[str]:
        """Read documents from a file, preserving their order."""


class LineCorpusParser(CorpusParser):
    """One document per non-blank line."""

    extensions = (".txt", ".md", ".markdown")

    def parse(self, path: Path) -> list[str]:
        text = path.read_text(encoding="utf-8")
        return [line.strip() for line in text.splitlines() if line.strip()]


class JsonCorpusParser(CorpusParser):
    """A JSON array of strings, or an object with a `documents` array."""

    extensions = (".json",)

    def parse(self, path: Path) -> list[str]:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(payload, dict):
            payload = payload.get("documents")
        if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
            raise ValueError(f"Expected a JSON list of strings in {path}")
        return [normalize_document(item) for item in payload]


class CorpusLoader:
    """Maps file extension to corpus parser."""

    def __init__(self, parsers: list[CorpusParser] | None = None) -> None:
        self._parsers: dict[str, CorpusParser] = {}
        for parser in parsers or [LineCorpusParser(), JsonCorpusParser()]:
            self.register(parser)

    def register(self, parser: CorpusParser) -> None:
        for extension in parser.extensions:
            self._parsers[extension.lower()] = parser

    def load(self, path: str | Path) -> list[str]:
        file_path = Path(path)
        parser = self._parsers.get(file_path.suffix.lower())
        if parser is None:
            raise ValueError(f"No corpus parser registered for extension: {file_path.suffix}")
        documents = parser.parse(file_path)
        logger.info(f"Loaded {len(documents)} documents from {file_path}")
        return documents
