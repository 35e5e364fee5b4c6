import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.common.verification_code import CodePurpose
from app.repositories.user_repository import UserRepository
from app.services.auths.code_issuer_service import CodeIssuer, IssuedCode
from app.services.auths.code_verifier_service import CodeState, CodeVerifier, VerifiedCode

logger = logging.getLogger(__name__)

# Propósitos que se envían por /send-verification-code
EMAIL_PURPOSES = (CodePurpose.REGISTRATION, CodePurpose.PASSWORD_RESET, CodePurpose.EMAIL_CHANGE)


@dataclass
class EmailVerification:
    """Códigos de registro, recuperación de contraseña y cambio de correo."""
    db: AsyncSession
    issuer: CodeIssuer
    verifier: CodeVerifier

    async def send_code(
        self,
        email: str,
        purpose: CodePurpose,
        user_uid: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> IssuedCode:
        return await self.issuer.issue_code(
            subject=email,
            purpose=purpose,
            recipient=email,
            user_uid=user_uid,
            user_name=user_name,
        )

    async def verify_code(self, email: str, code: str, purpose: CodePurpose) -> VerifiedCode:
        verified = await self.verifier.verify_code(email, purpose, code)

        if purpose == CodePurpose.REGISTRATION and verified.user_uid:
            try:
                await UserRepository(self.db).mark_email_verified(verified.user_uid, verified.verified_at)
                await self.db.commit()
            except SQLAlchemyError as e:
                # El código ya fue consumido; la verificación se mantiene
                await self.db.rollback()
                logger.warning(f"⚠️ No se pudo marcar el correo de {verified.user_uid} como verificado: {str(e)}")

        return verified

    async def get_status(self, email: str, purpose: CodePurpose) -> CodeState:
        return await self.verifier.inspect(email, purpose)
