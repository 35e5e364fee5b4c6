from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.auths.verification_schema import CODE_PATTERN, CodeStateData
from app.schemas.common.response_schema import CamelModel, UtcDatetime


class SendActivationRequest(CamelModel):
    email: Optional[EmailStr] = None
    user_uid: Optional[str] = None


class ActivateAccountRequest(CamelModel):
    email: EmailStr
    code: str = Field(pattern=CODE_PATTERN)


class ActivationSentData(CamelModel):
    email: str
    expires_at: UtcDatetime


class ActivatedData(CamelModel):
    user_uid: str
    email: str
    activated_at: UtcDatetime
    can_login: bool = True


class ActivationStateData(CodeStateData):
    is_activated: bool = False
