"""Tests for the in-memory session store."""

from orderbot.domain.model.session import Session, Stage
from orderbot.infrastructure.persistence.memory_session_store import InMemorySessionStore


class TestInMemorySessionStore:

    def test_missing_session(self):
        assert InMemorySessionStore().get(42) is None

    def test_put_get_delete(self):
        store = InMemorySessionStore()
        session = Session(user_id=42)
        session.select_product(5)
        store.put(session)
        assert store.get(42).stage is Stage.AWAITING_QUANTITY
        assert len(store) == 1
        store.delete(42)
        assert store.get(42) is None
        assert len(store) == 0

    def test_stored_copy_is_isolated(self):
        store = InMemorySessionStore()
        session = Session(user_id=42)
        store.put(session)
        session.select_product(5)
        fetched = store.get(42)
        assert fetched.stage is Stage.IDLE
        fetched.select_product(1)
        assert store.get(42).stage is Stage.IDLE

    def test_one_lock_per_user(self):
        store = InMemorySessionStore()
        assert store.lock(42) is store.lock(42)
        assert store.lock(42) is not store.lock(7)
