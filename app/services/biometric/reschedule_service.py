import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.clock import utc_now
from app.models.biometric.appointment import BiometricAppointment
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.user_repository import UserRepository
from app.services.biometric.booking_service import validate_requested_slot
from app.services.externals.email_service import EmailNotifier
from app.services.notifications.appointment_email_service import send_appointment_email
from app.services.validation.exception import no_appointment_to_reschedule_exception, user_not_found_exception

logger = logging.getLogger(__name__)


@dataclass
class RescheduleEngine:
    db: AsyncSession
    notifier: EmailNotifier
    clock: Callable[[], datetime] = utc_now

    async def reschedule(
        self,
        user_uid: str,
        location_id: int,
        appointment_date: date,
        appointment_time: str,
    ) -> BiometricAppointment:
        """
        Mueve la cita programada del usuario a otra sede/fecha/hora.
        Se actualiza la misma fila; la cita propia no cuenta contra el cupo del nuevo horario.
        """
        now = self.clock()
        appointments = AppointmentRepository(self.db)

        user = await UserRepository(self.db).get_by_uid(user_uid)
        if user is None:
            await user_not_found_exception()

        appointment = await appointments.find_scheduled_for_user(user_uid)
        if appointment is None:
            await no_appointment_to_reschedule_exception()

        previous = f"sede {appointment.location_id} {appointment.appointment_date.isoformat()} {appointment.appointment_time}"

        await validate_requested_slot(
            self.db,
            location_id,
            appointment_date,
            appointment_time,
            now,
            exclude_id=appointment.id,
        )

        await appointments.move(appointment, location_id, appointment_date, appointment_time, now)
        await self.db.commit()

        appointment = await appointments.reload(appointment.id)
        logger.info(
            f"✅ Cita {appointment.id} reprogramada: {previous} -> "
            f"sede {location_id} {appointment_date.isoformat()} {appointment_time}"
        )

        await send_appointment_email(self.notifier, "appointment_reschedule", user, appointment)
        return appointment
