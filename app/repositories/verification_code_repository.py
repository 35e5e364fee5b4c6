"""Repositorio para los códigos de verificación, activación y 2FA."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.common.verification_code import VerificationCode


class VerificationCodeRepository:
    """Todas las consultas sobre la tabla verification_codes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_latest(self, subject: str, purpose: str) -> VerificationCode | None:
        """
        Último código emitido para (subject, purpose), sin importar si está usado o expirado.

        Returns:
            VerificationCode si existe, None en otro caso
        """
        result = await self.db.execute(
            select(VerificationCode)
            .where(
                VerificationCode.subject == subject,
                VerificationCode.purpose == purpose,
            )
            .order_by(VerificationCode.created_at.desc(), VerificationCode.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def create(
        self,
        subject: str,
        purpose: str,
        code: str,
        expires_at: datetime,
        created_at: datetime,
        max_attempts: int,
        user_uid: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> VerificationCode:
        verification_code = VerificationCode(
            subject=subject,
            purpose=purpose,
            code=code,
            user_uid=user_uid,
            attempts=0,
            max_attempts=max_attempts,
            is_used=False,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=created_at,
            expires_at=expires_at,
        )
        self.db.add(verification_code)
        await self.db.flush()
        return verification_code

    async def invalidate_active(self, subject: str, purpose: str, now: datetime) -> int:
        """
        Marca como usados todos los códigos sin usar de (subject, purpose).

        Returns:
            Número de códigos invalidados
        """
        result = await self.db.execute(
            update(VerificationCode)
            .where(
                VerificationCode.subject == subject,
                VerificationCode.purpose == purpose,
                VerificationCode.is_used == False,  # noqa: E712
            )
            .values(is_used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def mark_used(self, code_id: int, now: datetime) -> bool:
        result = await self.db.execute(
            update(VerificationCode)
            .where(VerificationCode.id == code_id)
            .values(is_used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def consume(self, code_id: int, submitted_code: str, now: datetime) -> bool:
        """
        Consume el código en una sola actualización condicional.

        Solo afecta la fila si sigue sin usar, le quedan intentos y el código coincide, de modo que
        dos peticiones concurrentes no pueden consumir el mismo código.

        Returns:
            True si esta llamada consumió el código
        """
        result = await self.db.execute(
            update(VerificationCode)
            .where(
                VerificationCode.id == code_id,
                VerificationCode.is_used == False,  # noqa: E712
                VerificationCode.attempts < VerificationCode.max_attempts,
                VerificationCode.code == submitted_code,
            )
            .values(
                is_used=True,
                used_at=now,
                attempts=VerificationCode.attempts + 1,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def increment_attempts(self, code_id: int) -> None:
        await self.db.execute(
            update(VerificationCode)
            .where(VerificationCode.id == code_id)
            .values(attempts=VerificationCode.attempts + 1)
            .execution_options(synchronize_session=False)
        )

    async def cleanup_expired(self, now: datetime, older_than_hours: int = 1) -> int:
        """
        Elimina códigos usados o expirados creados hace más de `older_than_hours`.

        Returns:
            Número de registros eliminados
        """
        threshold = now - timedelta(hours=older_than_hours)
        result = await self.db.execute(
            delete(VerificationCode)
            .where(
                VerificationCode.created_at < threshold,
                or_(
                    VerificationCode.is_used == True,  # noqa: E712
                    VerificationCode.expires_at < now,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
