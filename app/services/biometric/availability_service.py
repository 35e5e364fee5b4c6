import logging
from dataclasses import dataclass
from datetime import date
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.location_repository import LocationRepository
from app.services.biometric.schedule_rules import check_is_weekday, get_day_of_week
from app.services.validation.exception import location_not_found_exception, weekend_unavailable_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotAvailability:
    slot_id: int
    start_time: str
    end_time: str
    max_appointments: int
    booked_count: int
    spots_remaining: int
    is_available: bool


@dataclass
class AvailabilityCalculator:
    db: AsyncSession

    async def get_availability(self, location_id: int, appointment_date: date) -> List[SlotAvailability]:
        """
        Cupos restantes por horario para una sede y fecha.
        Solo lee; dos llamadas sin reservas intermedias devuelven lo mismo.
        """
        if not check_is_weekday(appointment_date):
            await weekend_unavailable_exception()

        locations = LocationRepository(self.db)
        if await locations.get_active(location_id) is None:
            await location_not_found_exception()

        slots = await locations.list_slots(location_id, get_day_of_week(appointment_date))
        booked = await AppointmentRepository(self.db).count_scheduled_by_time(location_id, appointment_date)

        availability = []
        for slot in slots:
            booked_count = booked.get(slot.start_time, 0)
            # Una carrera antigua pudo sobrepasar el cupo; nunca se reporta negativo
            spots_remaining = max(slot.max_appointments - booked_count, 0)
            availability.append(
                SlotAvailability(
                    slot_id=slot.id,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    max_appointments=slot.max_appointments,
                    booked_count=booked_count,
                    spots_remaining=spots_remaining,
                    is_available=spots_remaining > 0,
                )
            )

        logger.info(f"Disponibilidad sede {location_id} {appointment_date.isoformat()}: {len(availability)} horarios")
        return availability
