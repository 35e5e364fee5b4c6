import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from app.configs.settings import settings
from app.cores.clock import utc_now
from app.models.biometric.appointment import AppointmentStatus, BiometricAppointment
from app.repositories.appointment_repository import AppointmentRepository
from app.repositories.user_repository import UserRepository
from app.services.biometric.schedule_rules import get_appointment_start
from app.services.externals.email_service import EmailNotifier
from app.services.notifications.appointment_email_service import send_appointment_email
from app.services.validation.exception import (
    appointment_not_active_exception,
    no_appointment_exception,
    too_late_to_cancel_exception,
)

logger = logging.getLogger(__name__)


@dataclass
class CancellationService:
    db: AsyncSession
    notifier: EmailNotifier
    clock: Callable[[], datetime] = utc_now

    async def cancel(self, user_uid: str) -> BiometricAppointment:
        """
        Cancela la cita del usuario si faltan al menos CANCELLATION_NOTICE_HOURS horas.
        La fila se conserva con status='cancelled'.
        """
        now = self.clock()
        appointments = AppointmentRepository(self.db)

        appointment = await appointments.find_scheduled_for_user(user_uid)
        if appointment is None:
            appointment = await appointments.find_latest_for_user(user_uid)
        if appointment is None:
            await no_appointment_exception()

        if appointment.status != AppointmentStatus.SCHEDULED.value:
            await appointment_not_active_exception(appointment.status)

        notice_hours = settings.CANCELLATION_NOTICE_HOURS
        starts_at = get_appointment_start(appointment.appointment_date, appointment.appointment_time)
        if starts_at - now < timedelta(hours=notice_hours):
            await too_late_to_cancel_exception(notice_hours)

        await appointments.set_status(appointment, AppointmentStatus.CANCELLED.value, now)
        await self.db.commit()
        logger.info(f"✅ Cita {appointment.id} de {user_uid} cancelada")

        user = await UserRepository(self.db).get_by_uid(user_uid)
        if user is not None:
            await send_appointment_email(self.notifier, "appointment_cancellation", user, appointment)
        return appointment
