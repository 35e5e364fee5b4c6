from typing import Optional

from pydantic import Field

from app.schemas.auths.verification_schema import CODE_PATTERN
from app.schemas.common.response_schema import CamelModel, UtcDatetime


class SendTwoFactorRequest(CamelModel):
    user_uid: str = Field(min_length=1)


class VerifyTwoFactorRequest(CamelModel):
    user_uid: str = Field(min_length=1)
    code: str = Field(pattern=CODE_PATTERN)


class CompleteLoginRequest(VerifyTwoFactorRequest):
    pass


class TwoFactorSentData(CamelModel):
    user_uid: str
    expires_at: UtcDatetime


class TwoFactorVerifiedData(CamelModel):
    user_uid: str
    verified_at: UtcDatetime


class UserData(CamelModel):
    uid: str
    first_name: str
    last_name: str
    email: str
    nid: str
    phone_number: str
    address: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class CompletedLoginData(CamelModel):
    user: UserData
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
