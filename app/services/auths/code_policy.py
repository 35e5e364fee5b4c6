"""
Parámetros de cada tipo de código: vigencia, espera entre envíos, intentos y plantilla de correo.
"""

from dataclasses import dataclass
from datetime import timedelta

from app.configs.settings import settings
from app.models.common.verification_code import CodePurpose


@dataclass(frozen=True)
class CodePolicy:
    ttl: timedelta
    cooldown_seconds: int
    max_attempts: int
    template: str
    # Texto que se muestra en el correo ("10 minutes", "24 hours")
    expires_in: str
    # Invalida los códigos sin usar anteriores antes de emitir uno nuevo
    invalidate_previous: bool = False


def get_code_policy(purpose: CodePurpose | str) -> CodePolicy:
    purpose = CodePurpose(purpose)

    if purpose == CodePurpose.ACTIVATION:
        hours = settings.ACTIVATION_CODE_EXPIRE_HOURS
        return CodePolicy(
            ttl=timedelta(hours=hours),
            cooldown_seconds=settings.ACTIVATION_CODE_COOLDOWN_SECONDS,
            max_attempts=settings.VERIFICATION_CODE_MAX_ATTEMPTS,
            template="activation_code",
            expires_in=f"{hours} hours",
        )

    minutes = settings.VERIFICATION_CODE_EXPIRE_MINUTES
    if purpose == CodePurpose.TWO_FACTOR_LOGIN:
        return CodePolicy(
            ttl=timedelta(minutes=minutes),
            cooldown_seconds=settings.VERIFICATION_CODE_COOLDOWN_SECONDS,
            max_attempts=settings.VERIFICATION_CODE_MAX_ATTEMPTS,
            template="two_factor_code",
            expires_in=f"{minutes} minutes",
            invalidate_previous=True,
        )

    # registration, password_reset, email_change
    return CodePolicy(
        ttl=timedelta(minutes=minutes),
        cooldown_seconds=settings.VERIFICATION_CODE_COOLDOWN_SECONDS,
        max_attempts=settings.VERIFICATION_CODE_MAX_ATTEMPTS,
        template="verification_code",
        expires_in=f"{minutes} minutes",
    )
