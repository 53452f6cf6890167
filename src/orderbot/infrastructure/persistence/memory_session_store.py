"""Process-local SessionStore.

Sessions are not persisted: a restart drops every cart in progress.
Abandoned sessions stay until their user cancels, clears or confirms.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict

from orderbot.domain.model.session import Session
from orderbot.domain.repository.session_store import SessionStore


class InMemorySessionStore(SessionStore):

    def __init__(self) -> None:
        self._sessions: dict[int, Session] = {}
        self._locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    def get(self, user_id: int) -> Session | None:
        session = self._sessions.get(user_id)
        return session.snapshot() if session is not None else None

    def put(self, session: Session) -> None:
        self._sessions[session.user_id] = session.snapshot()

    def delete(self, user_id: int) -> None:
        self._sessions.pop(user_id, None)

    def lock(self, user_id: int) -> asyncio.Lock:
        return self._locks[user_id]

    def __len__(self) -> int:
        return len(self._sessions)
