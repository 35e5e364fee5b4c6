"""
Modelo que representa la estructura de datos recibida y enviada por el endpoint de login
"""

from pydantic import EmailStr, Field

from app.schemas.common.response_schema import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginData(CamelModel):
    requires_2fa: bool = Field(default=True, alias="requires2FA")
    uid: str
    email: str
    code_sent: bool = True
    cooldown_seconds: int = 0
