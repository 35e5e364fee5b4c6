from datetime import date
from typing import Optional

from pydantic import Field

from app.schemas.common.response_schema import CamelModel, UtcDatetime

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AppointmentRequest(CamelModel):
    """Cuerpo de /book y /reschedule."""
    user_uid: str = Field(min_length=1)
    location_id: int = Field(gt=0)
    appointment_date: date
    appointment_time: str = Field(pattern=TIME_PATTERN)


class UserRequest(CamelModel):
    """Cuerpo de /cancel y /user-appointment."""
    user_uid: str = Field(min_length=1)


class LocationData(CamelModel):
    id: int
    name: str
    address: str
    electorate: Optional[str] = None
    phone: Optional[str] = None
    operating_hours: Optional[str] = None


class AppointmentData(CamelModel):
    id: int
    user_uid: str
    location_id: int
    appointment_date: date
    appointment_time: str
    status: str
    notes: Optional[str] = None
    location: Optional[LocationData] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class UserAppointmentData(CamelModel):
    has_appointment: bool
    appointment: Optional[AppointmentData] = None
