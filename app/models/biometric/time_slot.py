from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.cores.db import Base

class AppointmentTimeSlot(Base):
    __tablename__ = "appointment_time_slots"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("biometric_locations.id"), nullable=False, index=True)
    # 1=lunes .. 5=viernes
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False)  # "09:00"
    end_time = Column(String(5), nullable=False)
    max_appointments = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)

    location = relationship("BiometricLocation", backref="time_slots")

    def __repr__(self):
        return f"<AppointmentTimeSlot(location_id={self.location_id}, day={self.day_of_week}, start={self.start_time})>"
