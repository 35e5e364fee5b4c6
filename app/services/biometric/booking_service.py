"""
Reserva de citas biométricas.

La reserva se serializa por horario: la fila del horario se bloquea
(SELECT ... FOR UPDATE) antes de contar las citas, y el índice único parcial
sobre (user_uid) con status='scheduled' impide una segunda cita programada
aunque dos peticiones del mismo usuario pasen la validación a la vez.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.clock import utc_now
from app.models.biometric.appointment import BiometricAppointment
from app.models.biometric.time_slot import AppointmentTimeSlot
from app.models.users.user import User
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.location_repository import LocationRepository
from app.repositories.user_repository import UserRepository
from app.services.biometric.schedule_rules import check_is_weekday, get_day_of_week, get_local_today
from app.services.externals.email_service import EmailNotifier
from app.services.notifications.appointment_email_service import send_appointment_email
from app.services.validation.exception import (
    already_booked_exception,
    invalid_date_exception,
    invalid_slot_exception,
    location_not_found_exception,
    not_verified_exception,
    slot_full_exception,
    user_not_found_exception,
)

logger = logging.getLogger(__name__)


async def validate_requested_slot(
    db: AsyncSession,
    location_id: int,
    appointment_date: date,
    appointment_time: str,
    now: datetime,
    exclude_id: Optional[int] = None,
) -> AppointmentTimeSlot:
    """
    Valida fecha, horario y cupo de un horario solicitado.

    Raises:
        INVALID_DATE si la fecha no es posterior a hoy o cae en fin de semana
        LOCATION_NOT_FOUND si la sede no existe o está inactiva
        INVALID_SLOT si no hay un horario activo que empiece a esa hora
        SLOT_FULL si el horario ya alcanzó max_appointments
    """
    if appointment_date <= get_local_today(now):
        await invalid_date_exception("Appointment date must be in the future")

    if not check_is_weekday(appointment_date):
        await invalid_date_exception("Appointments are only available Monday through Friday")

    locations = LocationRepository(db)
    if await locations.get_active(location_id) is None:
        await location_not_found_exception()

    slot = await locations.find_slot(
        location_id,
        get_day_of_week(appointment_date),
        appointment_time,
        for_update=True,
    )
    if slot is None:
        await invalid_slot_exception()

    booked = await AppointmentRepository(db).count_scheduled(
        location_id,
        appointment_date,
        appointment_time,
        exclude_id=exclude_id,
    )
    if booked >= slot.max_appointments:
        await slot_full_exception()

    return slot


async def get_verified_user(db: AsyncSession, user_uid: str) -> User:
    user = await UserRepository(db).get_by_uid(user_uid)
    if user is None:
        await user_not_found_exception()
    if not user.is_verified:
        await not_verified_exception("User must complete face verification before booking biometric appointment")
    return user


@dataclass
class BookingEngine:
    db: AsyncSession
    notifier: EmailNotifier
    clock: Callable[[], datetime] = utc_now

    async def book(
        self,
        user_uid: str,
        location_id: int,
        appointment_date: date,
        appointment_time: str,
    ) -> BiometricAppointment:
        now = self.clock()
        appointments = AppointmentRepository(self.db)

        user = await get_verified_user(self.db, user_uid)

        if await appointments.find_scheduled_for_user(user_uid) is not None:
            await already_booked_exception()

        await validate_requested_slot(self.db, location_id, appointment_date, appointment_time, now)

        try:
            appointment = await appointments.create(user_uid, location_id, appointment_date, appointment_time, now)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Reserva concurrente rechazada para {user_uid}")
            await already_booked_exception()

        appointment = await appointments.reload(appointment.id)
        logger.info(
            f"✅ Cita {appointment.id} reservada para {user_uid}: sede {location_id} "
            f"{appointment_date.isoformat()} {appointment_time}"
        )

        await send_appointment_email(self.notifier, "appointment_confirmation", user, appointment)
        return appointment
