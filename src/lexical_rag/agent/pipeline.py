"""Routed query pipeline: router -> branch -> retrieval or direct handler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from loguru import logger

from lexical_rag.agent.completion import ChatCompleter, build_messages
from lexical_rag.agent.memory import SessionMemory
from lexical_rag.agent.router import KeywordRouter
from lexical_rag.config import PipelineConfig
from lexical_rag.obs.tracing import Timer, TraceStore, estimate_token_count
from lexical_rag.retrieval.context import format_context
from lexical_rag.retrieval.retriever import LexicalRetriever
from lexical_rag.types import Route, ScoredEntry

Handler = Callable[[str, list[BaseMessage]], tuple[str, list[ScoredEntry]]]


@dataclass(slots=True)
class PipelineResult:
    query: str
    route: Route
    answer: str
    sources: list[ScoredEntry] = field(default_factory=list)
    trace_id: str = ""
    latency_ms: float = 0.0
    session_id: str | None = None

    @property
    def citations(self) -> list[int]:
        return [hit.position for hit in self.sources]


class RagPipeline:
    """Answers queries either from retrieved knowledge or directly.

    The router's label selects a handler from an explicit route table. The
    retrieval handler sends the numbered context block as its own system
    message; when nothing relevant is retrieved the block is the no-knowledge
    placeholder so the model can decline instead of guessing.

    With a `session_id`, each turn is stored in `memory` and earlier turns of
    that session are replayed between the system prompt and the query on the
    direct route.
    """

    def __init__(
        self,
        *,
        retriever: LexicalRetriever,
        completer: ChatCompleter,
        trace_store: TraceStore | None = None,
        router: KeywordRouter | None = None,
        config: PipelineConfig | None = None,
        memory: SessionMemory | None = None,
    ) -> None:
        self.retriever = retriever
        self.completer = completer
        self.trace_store = trace_store or TraceStore()
        self.router = router or KeywordRouter()
        self.config = config or PipelineConfig()
        self.memory = memory or SessionMemory()
        self._handlers: dict[Route, Handler] = {
            Route.RETRIEVAL: self._answer_from_knowledge,
            Route.DIRECT: self._answer_directly,
        }

    def invoke(self, query: str, *, session_id: str | None = None) -> PipelineResult:
        """Route, answer and trace one query."""
        history = self.memory.get(session_id) if session_id else []
        with Timer() as timer:
            route = self.router.route(query)
            logger.info(f"Route selected: {route.value} for query={query!r}")
            answer, sources = self._handlers[route](query, history)
        if session_id:
            self.memory.add(session_id, HumanMessage(content=query), AIMessage(content=answer))
        result = self._record(query, route, answer, sources, timer.elapsed_ms)
        result.session_id = session_id
        return result

    def answer_with_context(self, query: str) -> PipelineResult:
        """Always answer from retrieved knowledge, declining when none is found."""
        with Timer() as timer:
            answer, sources = self._retrieve_and_generate(
                query, self.config.grounded_system_prompt
            )
        return self._record(query, Route.RETRIEVAL, answer, sources, timer.elapsed_ms)

    def _answer_from_knowledge(
        self, query: str, history: list[BaseMessage]
    ) -> tuple[str, list[ScoredEntry]]:
        del history  # retrieval answers rely on the context block only.
        return self._retrieve_and_generate(query, self.config.rag_system_prompt)

    def _answer_directly(
        self, query: str, history: list[BaseMessage]
    ) -> tuple[str, list[ScoredEntry]]:
        messages: list[BaseMessage] = [SystemMessage(content=self.config.direct_system_prompt)]
        messages.extend(history)
        messages.append(HumanMessage(content=query))
        return self.completer.complete(messages), []

    def _retrieve_and_generate(
        self, query: str, system_prompt: str
    ) -> tuple[str, list[ScoredEntry]]:
        hits = self.retriever.retrieve(query)
        if not hits:
            logger.info(f"No relevant knowledge for query={query!r}")
        context = format_context(hits, placeholder=self.config.no_context_placeholder)
        messages = build_messages(
            [system_prompt, self.config.context_header + context],
            query,
        )
        return self.completer.complete(messages), hits

    def _record(
        self,
        query: str,
        route: Route,
        answer: str,
        sources: list[ScoredEntry],
        latency_ms: float,
    ) -> PipelineResult:
        record = self.trace_store.create_record(
            question=query,
            route=route,
            answer=answer,
            citations=[hit.position for hit in sources],
            source_snippets=[hit.entry.text for hit in sources],
            input_tokens=estimate_token_count(query),
            output_tokens=estimate_token_count(answer),
            latency_ms=latency_ms,
        )
        return PipelineResult(
            query=query,
            route=route,
            answer=answer,
            sources=sources,
            trace_id=record.trace_id,
            latency_ms=record.latency_ms,
        )
