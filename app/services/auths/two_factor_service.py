"""
Segundo factor del login: código de 6 dígitos enviado al correo del usuario.
El subject de estos códigos es el uid del usuario.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.token import create_access_token, create_refresh_token
from app.models.common.verification_code import CodePurpose
from app.models.users.user import User
from app.repositories.user_repository import UserRepository
from app.services.auths.code_issuer_service import CodeIssuer, IssuedCode
from app.services.auths.code_verifier_service import CodeVerifier, VerifiedCode
from app.services.validation.exception import user_not_found_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedLogin:
    user: User
    access_token: str
    refresh_token: str


@dataclass
class TwoFactorLogin:
    db: AsyncSession
    issuer: CodeIssuer
    verifier: CodeVerifier

    async def _get_user(self, user_uid: str) -> User:
        user = await UserRepository(self.db).get_by_uid(user_uid)
        if user is None:
            await user_not_found_exception()
        return user

    async def send_code(
        self,
        user_uid: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> IssuedCode:
        user = await self._get_user(user_uid)
        return await self.issuer.issue_code(
            subject=user.uid,
            purpose=CodePurpose.TWO_FACTOR_LOGIN,
            recipient=user.email,
            user_uid=user.uid,
            user_name=user.full_name,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def verify_code(self, user_uid: str, code: str) -> VerifiedCode:
        return await self.verifier.verify_code(user_uid, CodePurpose.TWO_FACTOR_LOGIN, code)

    async def complete_login(self, user_uid: str, code: str) -> CompletedLogin:
        await self.verify_code(user_uid, code)
        user = await self._get_user(user_uid)

        token_data = {"sub": user.uid, "email": user.email}
        logger.info(f"✅ Login con 2FA completado para {user.uid}")
        return CompletedLogin(
            user=user,
            access_token=create_access_token(token_data),
            refresh_token=create_refresh_token(token_data),
        )
