"""Console demo: build the knowledge index and answer the sample questions."""

from __future__ import annotations

import sys

from loguru import logger

from lexical_rag.agent.completion import DeterministicCompleter, LangChainCompleter, create_chat_model
from lexical_rag.agent.pipeline import RagPipeline
from lexical_rag.config import PipelineConfig, RetrievalConfig, Settings
from lexical_rag.exceptions import GenerationError
from lexical_rag.ingest.corpus import DEFAULT_DOCUMENTS, CorpusLoader
from lexical_rag.obs.logger import setup_logger
from lexical_rag.retrieval.index import IndexHolder
from lexical_rag.retrieval.retriever import LexicalRetriever

GROUNDED_QUESTION = "Eino 的 Stream 是怎么实现的？"
ROUTED_QUESTIONS = (
    "Eino 的编排能力是什么？",
    "今天天气怎么样？",
)


def main() -> int:
    settings = Settings()
    setup_logger(settings.log_level)

    documents = (
        CorpusLoader().load(settings.corpus_path)
        if settings.corpus_path
        else list(DEFAULT_DOCUMENTS)
    )
    holder = IndexHolder(documents)
    logger.info(f"Indexed {len(holder.current())} knowledge entries")

    config = PipelineConfig()
    llm = create_chat_model(settings)
    completer = LangChainCompleter(llm) if llm is not None else DeterministicCompleter(config)
    if llm is None:
        logger.warning("ARK_API_KEY/ARK_BASE_URL/ARK_MODEL not set; answering offline")

    pipeline = RagPipeline(
        retriever=LexicalRetriever(holder, RetrievalConfig(top_k=settings.top_k)),
        completer=completer,
        config=config,
    )

    exit_code = 0
    try:
        result = pipeline.answer_with_context(GROUNDED_QUESTION)
        print(f"\n问题: {result.query}\n回答: {result.answer}")
    except GenerationError as exc:
        logger.error(f"Failed to answer {GROUNDED_QUESTION!r}: {exc}")
        exit_code = 1

    for question in ROUTED_QUESTIONS:
        try:
            result = pipeline.invoke(question)
        except GenerationError as exc:
            logger.error(f"Failed to answer {question!r}: {exc}")
            exit_code = 1
            continue
        print(f"\n问题: {result.query}\n路由: {result.route.value}\n回答: {result.answer}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
