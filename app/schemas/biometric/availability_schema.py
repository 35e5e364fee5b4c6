from datetime import date
from typing import List

from pydantic import Field

from app.schemas.common.response_schema import CamelModel


class AvailabilityRequest(CamelModel):
    location_id: int = Field(gt=0)
    appointment_date: date = Field(alias="date")


class SlotAvailabilityData(CamelModel):
    id: int
    start_time: str
    end_time: str
    max_appointments: int
    booked_count: int
    spots_remaining: int
    is_available: bool


class AvailabilityData(CamelModel):
    location_id: int
    appointment_date: date = Field(alias="date")
    available_slots: List[SlotAvailabilityData]
