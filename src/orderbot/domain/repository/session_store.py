"""Abstract store for per-user Sessions.

Besides get/put/delete the store hands out one lock per user id: every
state transition for a user must run while holding it, so two events of
the same user never interleave their read and write of the Session.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from orderbot.domain.model.session import Session


class SessionStore(ABC):

    @abstractmethod
    def get(self, user_id: int) -> Session | None:
        """Return the user's session, or None if there is none."""

    @abstractmethod
    def put(self, session: Session) -> None:
        """Store *session* under its ``user_id``, replacing any previous one."""

    @abstractmethod
    def delete(self, user_id: int) -> None:
        """Forget the user's session; no error if absent."""

    @abstractmethod
    def lock(self, user_id: int) -> asyncio.Lock:
        """Return the lock serializing transitions for *user_id*."""
