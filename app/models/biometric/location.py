from sqlalchemy import Column, Integer, String, Boolean
from app.cores.db import Base

class BiometricLocation(Base):
    __tablename__ = "biometric_locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    address = Column(String(255), nullable=False)
    electorate = Column(String(100), nullable=True)
    phone = Column(String(32), nullable=True)
    operating_hours = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<BiometricLocation(id={self.id}, name={self.name})>"
