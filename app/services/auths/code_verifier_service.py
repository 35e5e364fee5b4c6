"""
Verificación de códigos.

Orden de validación, igual para todos los propósitos:
    usado -> expirado -> sin intentos -> código incorrecto.
El consumo es una única actualización condicional: si dos peticiones llegan
con el mismo código, solo una lo consume y la otra recibe CODE_USED.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.clock import as_utc, utc_now
from app.models.common.verification_code import CodePurpose
from app.repositories.verification_code_repository import VerificationCodeRepository
from app.services.validation.exception import (
    code_expired_exception,
    code_not_found_exception,
    code_used_exception,
    invalid_code_exception,
    too_many_attempts_exception,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedCode:
    code_id: int
    user_uid: Optional[str]
    verified_at: datetime


@dataclass(frozen=True)
class CodeState:
    has_code: bool
    is_used: bool = False
    is_expired: bool = False
    attempts_left: int = 0
    can_retry: bool = False
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass
class CodeVerifier:
    db: AsyncSession
    clock: Callable[[], datetime] = utc_now

    async def verify_code(self, subject: str, purpose: CodePurpose | str, submitted_code: str) -> VerifiedCode:
        purpose = CodePurpose(purpose)
        codes = VerificationCodeRepository(self.db)
        now = self.clock()

        record = await codes.find_latest(subject, purpose.value)
        if record is None:
            await code_not_found_exception()

        if record.is_used:
            await code_used_exception()

        if now >= as_utc(record.expires_at):
            await codes.mark_used(record.id, now)
            await self.db.commit()
            await code_expired_exception()

        if record.attempts >= record.max_attempts:
            await codes.mark_used(record.id, now)
            await self.db.commit()
            await too_many_attempts_exception()

        if record.code != submitted_code:
            attempts_left = max(record.max_attempts - record.attempts - 1, 0)
            try:
                await codes.increment_attempts(record.id)
                await self.db.commit()
            except SQLAlchemyError as e:
                # El usuario igual recibe INVALID_CODE
                await self.db.rollback()
                logger.warning(f"⚠️ No se pudo incrementar intentos del código {record.id}: {str(e)}")
            logger.info(f"Código {purpose.value} incorrecto para {subject}, quedan {attempts_left} intentos")
            await invalid_code_exception(attempts_left)

        consumed = await codes.consume(record.id, submitted_code, now)
        if not consumed:
            await self.db.rollback()
            logger.info(f"Código {record.id} consumido por otra petición")
            await code_used_exception()

        await self.db.commit()
        logger.info(f"✅ Código {purpose.value} verificado para {subject}")
        return VerifiedCode(code_id=record.id, user_uid=record.user_uid, verified_at=now)

    async def inspect(self, subject: str, purpose: CodePurpose | str) -> CodeState:
        """Estado del último código de (subject, purpose), sin modificarlo."""
        purpose = CodePurpose(purpose)
        record = await VerificationCodeRepository(self.db).find_latest(subject, purpose.value)
        if record is None:
            return CodeState(has_code=False)

        expires_at = as_utc(record.expires_at)
        is_expired = self.clock() >= expires_at
        attempts_left = max(record.max_attempts - record.attempts, 0)
        return CodeState(
            has_code=True,
            is_used=record.is_used,
            is_expired=is_expired,
            attempts_left=attempts_left,
            can_retry=not record.is_used and not is_expired and attempts_left > 0,
            expires_at=expires_at,
            created_at=as_utc(record.created_at),
        )
