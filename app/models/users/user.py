from sqlalchemy import Column, String, DateTime, Boolean
from app.cores.db import Base
from app.cores.clock import utc_now

class User(Base):
    __tablename__ = "users"

    uid = Column(String(64), primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    nid = Column(String(32), nullable=False)
    phone_number = Column(String(32), nullable=False)
    address = Column(String(255), nullable=True)
    password = Column(String(255), nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)
    # Verificación de identidad (documento + rostro) completada durante el registro
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User(email={self.email}, first_name={self.first_name}, last_name={self.last_name})>"
