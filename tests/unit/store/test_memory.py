"""Tests for the in-memory user and session stores."""

import uuid
from datetime import timedelta

import pytest

from userhub.exceptions import DuplicateError, InvalidIdError
from userhub.models import UserSnapshot
from userhub.store.memory import InMemorySessionStore, InMemoryUserStore


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


async def _create(store: InMemoryUserStore, email: str = "ada@example.com"):
    return await store.create(
        name="Ada",
        email=email,
        phone_number="555-0100",
        role="admin",
        password="$2b$04$hash",
    )


# ==================== User Store Tests ====================


class TestInMemoryUserStore:
    """Tests for InMemoryUserStore."""

    @pytest.mark.asyncio
    async def test_create_generates_uuid(self, store):
        """Test created users get a UUID id."""
        user = await _create(store)
        assert str(uuid.UUID(user.id)) == user.id
        assert user.email == "ada@example.com"
        assert user.phone_number == "555-0100"

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, store):
        """Test creating a second user with one email fails."""
        await _create(store)
        with pytest.raises(DuplicateError):
            await _create(store)
        assert len(await store.list_all()) == 1

    @pytest.mark.asyncio
    async def test_find_by_email(self, store):
        """Test lookup by email."""
        user = await _create(store)
        assert await store.find_by_email("ada@example.com") == user
        assert await store.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, store):
        """Test lookup by id."""
        user = await _create(store)
        assert await store.find_by_id(user.id) == user
        assert await store.find_by_id(str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_find_by_malformed_id(self, store):
        """Test malformed ids raise InvalidIdError."""
        with pytest.raises(InvalidIdError):
            await store.find_by_id("not-an-id")

    @pytest.mark.asyncio
    async def test_list_all(self, store):
        """Test listing every user."""
        await _create(store, "a@example.com")
        await _create(store, "b@example.com")
        emails = {u.email for u in await store.list_all()}
        assert emails == {"a@example.com", "b@example.com"}

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, store):
        """Test update overwrites only the given fields."""
        user = await _create(store)
        updated = await store.update_by_id(user.id, {"name": "X"})

        assert updated.name == "X"
        assert updated.email == user.email
        assert updated.role == user.role
        assert updated.password == user.password
        assert (await store.find_by_id(user.id)).name == "X"

    @pytest.mark.asyncio
    async def test_update_ignores_unknown_fields_and_id(self, store):
        """Test update never rewrites the id."""
        user = await _create(store)
        updated = await store.update_by_id(user.id, {"id": "other", "colour": "red"})
        assert updated == user

    @pytest.mark.asyncio
    async def test_update_stores_password_as_given(self, store):
        """Test update does not hash the password."""
        user = await _create(store)
        updated = await store.update_by_id(user.id, {"password": "plain"})
        assert updated.password == "plain"

    @pytest.mark.asyncio
    async def test_update_missing(self, store):
        """Test updating an unknown id returns None."""
        assert await store.update_by_id(str(uuid.uuid4()), {"name": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, store):
        """Test delete returns the removed record."""
        user = await _create(store)
        assert await store.delete_by_id(user.id) == user
        assert await store.find_by_id(user.id) is None
        assert await store.delete_by_id(user.id) is None


# ==================== Session Store Tests ====================


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore."""

    @pytest.fixture
    def snapshot(self) -> UserSnapshot:
        return UserSnapshot(id=str(uuid.uuid4()), name="Ada", email="ada@example.com")

    @pytest.mark.asyncio
    async def test_create_and_get(self, snapshot):
        """Test a created session can be read back."""
        store = InMemorySessionStore()
        session = await store.create(snapshot)

        assert session.expires - session.created_at == timedelta(hours=24)
        fetched = await store.get(session.id)
        assert fetched.user == snapshot

    @pytest.mark.asyncio
    async def test_session_ids_are_unique(self, snapshot):
        """Test each session gets its own id."""
        store = InMemorySessionStore()
        first = await store.create(snapshot)
        second = await store.create(snapshot)
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_expired_session_reads_as_absent(self, snapshot):
        """Test lazy expiry on read."""
        store = InMemorySessionStore(max_age=timedelta(seconds=-1))
        session = await store.create(snapshot)
        assert await store.get(session.id) is None

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self, snapshot):
        """Test destroying twice is fine."""
        store = InMemorySessionStore()
        session = await store.create(snapshot)
        await store.destroy(session.id)
        await store.destroy(session.id)
        assert await store.get(session.id) is None

    @pytest.mark.asyncio
    async def test_purge_expired(self, snapshot):
        """Test purge removes only expired sessions."""
        live_store = InMemorySessionStore()
        live = await live_store.create(snapshot)
        assert await live_store.purge_expired() == 0
        assert await live_store.get(live.id) is not None

        stale_store = InMemorySessionStore(max_age=timedelta(seconds=-1))
        await stale_store.create(snapshot)
        await stale_store.create(snapshot)
        assert await stale_store.purge_expired() == 2
        assert await stale_store.purge_expired() == 0
