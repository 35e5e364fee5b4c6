import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.exceptions import ApiError
from app.cores.security import verify_password
from app.models.users.user import User
from app.repositories.user_repository import UserRepository
from app.services.auths.two_factor_service import TwoFactorLogin
from app.services.validation.exception import invalid_credentials_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: User
    code_sent: bool
    cooldown_seconds: int = 0


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    user = await UserRepository(db).get_by_email(email)

    if not user or not verify_password(password, user.password):
        await invalid_credentials_exception()

    return user


async def login_user(
    db: AsyncSession,
    two_factor: TwoFactorLogin,
    email: str,
    password: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> LoginResult:
    """
    Verifica la contraseña y envía el código 2FA; el login termina en /complete-2fa-login.
    Si ya hay un código reciente sin usar, no se envía otro y se informa el tiempo de espera.
    """
    user = await authenticate_user(db, email, password)
    logger.info(f"Contraseña verificada para {user.uid}")

    try:
        await two_factor.send_code(user.uid, ip_address=ip_address, user_agent=user_agent)
    except ApiError as e:
        if e.error_code != "RATE_LIMITED":
            raise
        return LoginResult(user=user, code_sent=False, cooldown_seconds=e.extra.get("cooldownSeconds", 0))

    return LoginResult(user=user, code_sent=True)
