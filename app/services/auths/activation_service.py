"""
Activación de cuenta por código enviado al correo (vigencia de 24 horas).
Al activar se marcan email_verified, email_verified_at e is_verified del usuario.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.common.verification_code import CodePurpose
from app.models.users.user import User
from app.repositories.user_repository import UserRepository
from app.services.auths.code_issuer_service import CodeIssuer, IssuedCode
from app.services.auths.code_verifier_service import CodeState, CodeVerifier
from app.services.validation.exception import missing_fields_exception, user_not_found_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivationResult:
    user_uid: str
    email: str
    activated_at: datetime


@dataclass(frozen=True)
class ActivationState:
    code: CodeState
    is_activated: bool


@dataclass
class AccountActivation:
    db: AsyncSession
    issuer: CodeIssuer
    verifier: CodeVerifier

    async def _find_user(self, email: Optional[str], user_uid: Optional[str]) -> User:
        users = UserRepository(self.db)
        user = None
        if user_uid:
            user = await users.get_by_uid(user_uid)
        elif email:
            user = await users.get_by_email(email)

        if user is None:
            await user_not_found_exception()
        return user

    async def send_activation(self, email: Optional[str] = None, user_uid: Optional[str] = None) -> IssuedCode:
        if not email and not user_uid:
            await missing_fields_exception("Email or user UID is required")

        user = await self._find_user(email, user_uid)
        issued = await self.issuer.issue_code(
            subject=user.email,
            purpose=CodePurpose.ACTIVATION,
            recipient=user.email,
            user_uid=user.uid,
            user_name=user.full_name,
        )
        logger.info(f"Código de activación enviado a {user.email}")
        return issued

    async def activate(self, email: str, code: str) -> ActivationResult:
        verified = await self.verifier.verify_code(email, CodePurpose.ACTIVATION, code)

        users = UserRepository(self.db)
        user = await users.get_by_uid(verified.user_uid) if verified.user_uid else None
        if user is None:
            user = await users.get_by_email(email)
        if user is None:
            await user_not_found_exception()

        await users.activate(user.uid, verified.verified_at)
        await self.db.commit()

        logger.info(f"✅ Cuenta {user.uid} activada")
        return ActivationResult(user_uid=user.uid, email=user.email, activated_at=verified.verified_at)

    async def get_status(self, email: str) -> ActivationState:
        code_state = await self.verifier.inspect(email, CodePurpose.ACTIVATION)
        user = await UserRepository(self.db).get_by_email(email)
        is_activated = bool(user and user.email_verified and user.is_verified)
        return ActivationState(code=code_state, is_activated=is_activated)
