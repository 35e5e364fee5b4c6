import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from app.cores.db import Base
from app.cores.clock import utc_now


class CodePurpose(str, enum.Enum):
    REGISTRATION = "registration"
    PASSWORD_RESET = "password_reset"
    EMAIL_CHANGE = "email_change"
    ACTIVATION = "activation"
    TWO_FACTOR_LOGIN = "2fa-login"


class VerificationCode(Base):
    __tablename__ = "verification_codes"

    id = Column(Integer, primary_key=True, index=True)
    # Email para registro/activación, uid del usuario para 2FA
    subject = Column(String(255), nullable=False)
    user_uid = Column(String(64), nullable=True, index=True)
    purpose = Column(String(50), nullable=False)
    code = Column(String(6), nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    max_attempts = Column(Integer, default=5, nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_verification_codes_subject_purpose", "subject", "purpose", "created_at"),
    )

    def __repr__(self):
        return f"<VerificationCode(subject={self.subject}, purpose={self.purpose}, is_used={self.is_used})>"
