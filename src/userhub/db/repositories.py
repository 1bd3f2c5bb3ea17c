"""SQL-backed stores."""

import logging
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from userhub.db.models import SessionORM, UserORM
from userhub.exceptions import DuplicateError
from userhub.models import Session, User, UserSnapshot
from userhub.models.session import utcnow
from userhub.models.user import USER_FIELDS
from userhub.store.base import (
    SessionStore,
    UserStore,
    new_session_id,
    new_user_id,
    parse_user_id,
)

logger = logging.getLogger(__name__)


class SqlUserStore(UserStore):
    """User store on the ``users`` table.

    Each operation runs in its own transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(
        self,
        *,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        role: Optional[str] = None,
    ) -> User:
        orm_user = UserORM(
            id=new_user_id(),
            name=name,
            email=email,
            phone_number=phone_number,
            role=role,
            password=password,
        )
        try:
            async with self._session_factory() as session, session.begin():
                session.add(orm_user)
        except IntegrityError:
            raise DuplicateError(email)
        return orm_user.to_user()

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).where(UserORM.email == email))
            orm_user = result.scalar_one_or_none()
        return orm_user.to_user() if orm_user else None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user_id = parse_user_id(user_id)
        async with self._session_factory() as session:
            orm_user = await session.get(UserORM, user_id)
        return orm_user.to_user() if orm_user else None

    async def list_all(self) -> list[User]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).order_by(UserORM.created_at))
            return [u.to_user() for u in result.scalars().all()]

    async def update_by_id(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        user_id = parse_user_id(user_id)
        async with self._session_factory() as session, session.begin():
            orm_user = await session.get(UserORM, user_id)
            if orm_user is None:
                return None
            for key, value in fields.items():
                if key in USER_FIELDS:
                    setattr(orm_user, key, value)
        return orm_user.to_user()

    async def delete_by_id(self, user_id: str) -> Optional[User]:
        user_id = parse_user_id(user_id)
        async with self._session_factory() as session, session.begin():
            orm_user = await session.get(UserORM, user_id)
            if orm_user is None:
                return None
            user = orm_user.to_user()
            await session.delete(orm_user)
        return user


class SqlSessionStore(SessionStore):
    """Session store on the ``sessions`` table.

    Expiry is checked on read; expired rows stay until :meth:`purge_expired`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._session_factory = session_factory

    async def create(self, user: UserSnapshot) -> Session:
        now = utcnow()
        orm_session = SessionORM(
            id=new_session_id(),
            data=user.to_dict(),
            expires=now + self.max_age,
            created_at=now,
        )
        async with self._session_factory() as session, session.begin():
            session.add(orm_session)
        return orm_session.to_session()

    async def get(self, session_id: str) -> Optional[Session]:
        async with self._session_factory() as session:
            orm_session = await session.get(SessionORM, session_id)
        if orm_session is None:
            return None
        result = orm_session.to_session()
        if result.is_expired():
            return None
        return result

    async def destroy(self, session_id: str) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(delete(SessionORM).where(SessionORM.id == session_id))

    async def purge_expired(self) -> int:
        async with self._session_factory() as session, session.begin():
            result = await session.execute(
                delete(SessionORM).where(SessionORM.expires <= utcnow())
            )
        logger.info("Purged %d expired sessions", result.rowcount)
        return result.rowcount
