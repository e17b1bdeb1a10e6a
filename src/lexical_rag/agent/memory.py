"""Per-session conversation memory for multi-turn chat."""

from __future__ import annotations

from threading import Lock

from langchain_core.messages import BaseMessage

from lexical_rag.config import MemoryConfig


class SessionMemory:
    """In-memory message history keyed by session id.

    Each session keeps only its most recent `max_messages` messages, counting
    both user and assistant turns.
    """

    def __init__(self, config: MemoryConfig | None = None) -> None:
        self.config = config or MemoryConfig()
        self._sessions: dict[str, list[BaseMessage]] = {}
        self._lock = Lock()

    def get(self, session_id: str) -> list[BaseMessage]:
        with self._lock:
            return list(self._sessions.get(session_id, []))

    def add(self, session_id: str, *messages: BaseMessage) -> None:
        with self._lock:
            history = self._sessions.setdefault(session_id, [])
            history.extend(messages)
            self._trim(session_id)

    def trim(self, session_id: str, max_messages: int | None = None) -> None:
        with self._lock:
            self._trim(session_id, max_messages)

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def sessions(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def _trim(self, session_id: str, max_messages: int | None = None) -> None:
        limit = self.config.max_messages if max_messages is None else max_messages
        history = self._sessions.get(session_id)
        if history is not None and len(history) > limit:
            self._sessions[session_id] = history[len(history) - limit :]
