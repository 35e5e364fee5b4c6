"""Repositorio de usuarios."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.users.user import User


class UserRepository:
    """Consultas sobre la tabla users usadas por los flujos de códigos y citas."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_uid(self, uid: str) -> User | None:
        result = await self.db.execute(select(User).where(User.uid == uid).execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email).execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def mark_email_verified(self, uid: str, now: datetime) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.uid == uid)
            .values(email_verified=True, email_verified_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def activate(self, uid: str, now: datetime) -> bool:
        """Marca el correo y la cuenta como verificados."""
        result = await self.db.execute(
            update(User)
            .where(User.uid == uid)
            .values(
                email_verified=True,
                email_verified_at=now,
                is_verified=True,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
