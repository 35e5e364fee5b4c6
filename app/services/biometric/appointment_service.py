from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.biometric.appointment import BiometricAppointment
from app.models.biometric.location import BiometricLocation
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.location_repository import LocationRepository


async def get_user_appointment(db: AsyncSession, user_uid: str) -> Optional[BiometricAppointment]:
    """Cita programada del usuario con su sede, o None."""
    return await AppointmentRepository(db).find_scheduled_for_user(user_uid)


async def get_active_locations(db: AsyncSession) -> List[BiometricLocation]:
    return await LocationRepository(db).list_active()
