"""Keyword router deciding between retrieval and direct answering."""

from __future__ import annotations

from lexical_rag.config import RouterConfig
from lexical_rag.types import Route


class KeywordRouter:
    """Routes a query to `Route.RETRIEVAL` when it mentions a configured keyword.

    Matching is a case-insensitive substring test, so keywords also match inside
    longer words and inside unsegmented CJK text.
    """

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()

    def route(self, query: str) -> Route:
        lowered = query.lower()
        if any(keyword in lowered for keyword in self.config.keywords):
            return Route.RETRIEVAL
        return Route.DIRECT


def route(query: str, keywords: tuple[str, ...] | None = None) -> Route:
    config = RouterConfig(keywords=keywords) if keywords is not None else RouterConfig()
    return KeywordRouter(config).route(query)
