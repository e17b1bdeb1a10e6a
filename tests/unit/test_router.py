import pytest
from pydantic import ValidationError

from lexical_rag.agent.router import KeywordRouter, route
from lexical_rag.config import RouterConfig
from lexical_rag.types import Route


def test_route_keyword_queries_to_retrieval() -> None:
    assert route("What is the Eino framework?") is Route.RETRIEVAL
    assert route("Eino 的编排能力是什么？") is Route.RETRIEVAL
    assert route("这个框架怎么用") is Route.RETRIEVAL


def test_route_other_queries_directly() -> None:
    assert route("What's the weather today?") is Route.DIRECT
    assert route("今天天气怎么样？") is Route.DIRECT
    assert route("") is Route.DIRECT


def test_router_keywords_are_configurable_and_case_insensitive() -> None:
    router = KeywordRouter(RouterConfig(keywords=("  LangChain ",)))

    assert router.config.keywords == ("langchain",)
    assert router.route("how does langchain work") is Route.RETRIEVAL
    assert router.route("What is the Eino framework?") is Route.DIRECT
    assert route("Tell me about FastAPI", keywords=("fastapi",)) is Route.RETRIEVAL


def test_router_rejects_blank_keywords() -> None:
    with pytest.raises(ValidationError):
        RouterConfig(keywords=(" ",))
