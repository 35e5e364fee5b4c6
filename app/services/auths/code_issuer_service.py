"""
Emisión de códigos de verificación, activación y 2FA.

Flujo de `issue_code`:
    1. Respeta el tiempo de espera desde el último código sin usar de (subject, purpose).
    2. Limpia códigos viejos (sin afectar el resultado si falla).
    3. Para 2FA invalida los códigos anteriores sin usar.
    4. Guarda el nuevo código y lo envía por correo.
    5. Si el correo falla, el código queda marcado como usado: nunca es válido
       un código que el usuario no recibió.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs.settings import settings
from app.cores.clock import as_utc, utc_now
from app.cores.environment import Environment
from app.cores.token import generate_verification_code
from app.models.common.verification_code import CodePurpose
from app.repositories.verification_code_repository import VerificationCodeRepository
from app.services.auths.code_policy import get_code_policy
from app.services.externals.email_service import EmailNotifier, NotificationError
from app.services.validation.exception import dispatch_failed_exception, rate_limited_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedCode:
    code_id: int
    code: str
    expires_at: datetime
    recipient: str


@dataclass
class CodeIssuer:
    db: AsyncSession
    notifier: EmailNotifier
    environment: Environment
    clock: Callable[[], datetime] = utc_now

    async def issue_code(
        self,
        subject: str,
        purpose: CodePurpose | str,
        recipient: str,
        user_uid: Optional[str] = None,
        user_name: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> IssuedCode:
        purpose = CodePurpose(purpose)
        policy = get_code_policy(purpose)
        codes = VerificationCodeRepository(self.db)
        now = self.clock()

        # Único punto donde se consulta el bypass de entornos no productivos
        bypass = self.environment.allow_insecure_bypass
        if bypass:
            logger.warning(f"⚠️ Bypass inseguro activo ({self.environment.name}): sin espera ni invalidación para {purpose.value}")

        if not bypass:
            await self._check_cooldown(codes, subject, purpose, policy.cooldown_seconds, now)

        await self._cleanup(codes, now)

        if policy.invalidate_previous and not bypass:
            invalidated = await codes.invalidate_active(subject, purpose.value, now)
            if invalidated:
                logger.info(f"Se invalidaron {invalidated} códigos {purpose.value} anteriores de {subject}")

        code = generate_verification_code()
        expires_at = now + policy.ttl
        record = await codes.create(
            subject=subject,
            purpose=purpose.value,
            code=code,
            expires_at=expires_at,
            created_at=now,
            max_attempts=policy.max_attempts,
            user_uid=user_uid,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        await self.db.commit()

        try:
            await self.notifier.send_template(
                policy.template,
                recipient,
                code=code,
                user_name=user_name,
                expires_in=policy.expires_in,
            )
        except NotificationError:
            await codes.mark_used(record.id, self.clock())
            await self.db.commit()
            logger.error(f"❌ Código {purpose.value} para {subject} invalidado: no se pudo enviar el correo")
            await dispatch_failed_exception()

        logger.info(f"✅ Código {purpose.value} emitido para {subject} (expira {expires_at.isoformat()})")
        return IssuedCode(code_id=record.id, code=code, expires_at=expires_at, recipient=recipient)

    async def _check_cooldown(
        self,
        codes: VerificationCodeRepository,
        subject: str,
        purpose: CodePurpose,
        cooldown_seconds: int,
        now: datetime,
    ) -> None:
        latest = await codes.find_latest(subject, purpose.value)
        if latest is None or latest.is_used:
            return

        elapsed = (now - as_utc(latest.created_at)).total_seconds()
        if elapsed < cooldown_seconds:
            remaining = max(math.ceil(cooldown_seconds - elapsed), 1)
            await rate_limited_exception(
                remaining,
                f"Please wait {remaining} seconds before requesting a new code",
            )

    async def _cleanup(self, codes: VerificationCodeRepository, now: datetime) -> None:
        try:
            removed = await codes.cleanup_expired(now, settings.CODE_RETENTION_HOURS)
            await self.db.commit()
            if removed:
                logger.info(f"Limpieza de códigos: {removed} registros eliminados")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"⚠️ Falló la limpieza de códigos, se continúa: {str(e)}")
