import enum

from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from app.cores.db import Base
from app.cores.clock import utc_now


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BiometricAppointment(Base):
    __tablename__ = "biometric_appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_uid = Column(String(64), ForeignKey("users.uid"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("biometric_locations.id"), nullable=False)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(5), nullable=False)  # coincide con AppointmentTimeSlot.start_time
    status = Column(String(20), nullable=False, default=AppointmentStatus.SCHEDULED.value)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    location = relationship("BiometricLocation", backref="appointments")
    user = relationship("User", backref="biometric_appointments")

    __table_args__ = (
        # Un usuario solo puede tener una cita programada a la vez
        Index(
            "uq_biometric_appointments_user_scheduled",
            "user_uid",
            unique=True,
            sqlite_where=text("status = 'scheduled'"),
            postgresql_where=text("status = 'scheduled'"),
        ),
        Index("ix_biometric_appointments_slot", "location_id", "appointment_date", "appointment_time", "status"),
    )

    def __repr__(self):
        return f"<BiometricAppointment(id={self.id}, user_uid={self.user_uid}, status={self.status})>"
