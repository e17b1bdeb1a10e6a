"""FastAPI entrypoint for query/search/index/trace endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from lexical_rag.agent.completion import (
    ChatCompleter,
    DeterministicCompleter,
    LangChainCompleter,
    create_chat_model,
)
from lexical_rag.agent.memory import SessionMemory
from lexical_rag.agent.pipeline import PipelineResult, RagPipeline
from lexical_rag.agent.router import KeywordRouter
from lexical_rag.config import (
    MemoryConfig,
    PipelineConfig,
    RetrievalConfig,
    RouterConfig,
    Settings,
)
from lexical_rag.exceptions import GenerationError
from lexical_rag.ingest.corpus import DEFAULT_DOCUMENTS, CorpusLoader, normalize_document
from lexical_rag.obs.logger import setup_logger
from lexical_rag.obs.tracing import TraceStore
from lexical_rag.retrieval.index import IndexHolder
from lexical_rag.retrieval.retriever import LexicalRetriever
from lexical_rag.types import ScoredEntry


class QueryRequest(BaseModel):
    question: str = Field(min_length=1)
    session_id: str | None = Field(default=None, min_length=1, max_length=128)


class SourceSearchRequest(BaseModel):
    query: str = Field(min_length=1)
    top_k: int = Field(default=2, ge=0, le=50)


class IndexRequest(BaseModel):
    documents: list[str]


class RouteRequest(BaseModel):
    query: str = Field(min_length=1)


def _load_documents(settings: Settings) -> list[str]:
    if settings.corpus_path:
        return CorpusLoader().load(settings.corpus_path)
    return list(DEFAULT_DOCUMENTS)


def _create_completer(settings: Settings, config: PipelineConfig) -> ChatCompleter:
    llm = create_chat_model(settings)
    if llm is None:
        logger.warning("ARK_API_KEY/ARK_BASE_URL/ARK_MODEL not set; using deterministic completer")
        return DeterministicCompleter(config)
    return LangChainCompleter(llm)


def _serialize_hit(hit: ScoredEntry) -> dict[str, Any]:
    return {
        "position": hit.position,
        "rank": hit.rank,
        "score": hit.score,
        "text": hit.entry.text,
    }


def _serialize_result(result: PipelineResult) -> dict[str, Any]:
    return {
        "query": result.query,
        "route": result.route.value,
        "answer": result.answer,
        "citations": result.citations,
        "sources": [_serialize_hit(hit) for hit in result.sources],
        "trace_id": result.trace_id,
        "session_id": result.session_id,
        "latency_ms": result.latency_ms,
    }


_settings = Settings()
setup_logger(_settings.log_level)

app = FastAPI(title="Lexical RAG Service", version="0.1.0")

_pipeline_config = PipelineConfig()
_index_holder = IndexHolder(_load_documents(_settings))
logger.info(f"Knowledge index built with {len(_index_holder.current())} entries")

_retriever = LexicalRetriever(_index_holder, RetrievalConfig(top_k=_settings.top_k))
_router = KeywordRouter(RouterConfig())
_completer = _create_completer(_settings, _pipeline_config)
_trace_store = TraceStore()
_memory = SessionMemory(MemoryConfig())
_pipeline = RagPipeline(
    retriever=_retriever,
    completer=_completer,
    trace_store=_trace_store,
    router=_router,
    config=_pipeline_config,
    memory=_memory,
)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "indexed_documents": len(_index_holder.current()),
        "index_generation": _index_holder.generation,
        "llm_configured": isinstance(_completer, LangChainCompleter),
        "completer_mode": "langchain"
        if isinstance(_completer, LangChainCompleter)
        else "deterministic",
        "trace_count": len(_trace_store),
    }


@app.post("/query")
def query(request: QueryRequest) -> dict[str, Any]:
    try:
        result = _pipeline.invoke(request.question, session_id=request.session_id)
    except GenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Query failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return _serialize_result(result)


@app.post("/route")
def route(request: RouteRequest) -> dict[str, str]:
    return {"query": request.query, "route": _router.route(request.query).value}


@app.post("/sources/search")
def source_search(request: SourceSearchRequest) -> dict[str, Any]:
    hits = _retriever.retrieve(request.query, top_k=request.top_k)
    return {"items": [_serialize_hit(hit) for hit in hits]}


@app.post("/index")
def rebuild_index(request: IndexRequest) -> dict[str, Any]:
    documents = [normalize_document(document) for document in request.documents]
    index, generation = _index_holder.publish(documents)
    return {
        "indexed_documents": len(index),
        "index_generation": generation,
    }


@app.get("/traces")
def traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(record) for record in _trace_store.list_recent(limit=limit)]
    return {"items": records}


@app.get("/traces/{trace_id}")
def trace_detail(trace_id: str) -> dict[str, Any]:
    try:
        record = _trace_store.get(trace_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return asdict(record)


@app.get("/metrics")
def metrics() -> dict[str, Any]:
    return _trace_store.summary()
