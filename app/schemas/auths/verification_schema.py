from typing import Literal, Optional

from pydantic import EmailStr, Field

from app.schemas.common.response_schema import CamelModel, UtcDatetime

EmailPurpose = Literal["registration", "password_reset", "email_change"]

CODE_PATTERN = r"^\d{6}$"


class SendVerificationCodeRequest(CamelModel):
    email: EmailStr
    purpose: EmailPurpose = "registration"
    user_uid: Optional[str] = None
    user_name: Optional[str] = None


class VerifyCodeRequest(CamelModel):
    email: EmailStr
    code: str = Field(pattern=CODE_PATTERN)
    purpose: EmailPurpose = "registration"


class CodeSentData(CamelModel):
    email: str
    purpose: str
    expires_at: UtcDatetime


class CodeVerifiedData(CamelModel):
    email: str
    purpose: str
    verified_at: UtcDatetime


class CodeStateData(CamelModel):
    has_code: bool
    is_used: bool = False
    is_expired: bool = False
    attempts_left: int = 0
    can_retry: bool = False
    expires_at: Optional[UtcDatetime] = None
    created_at: Optional[UtcDatetime] = None
