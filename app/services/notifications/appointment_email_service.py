"""
Correos de citas biométricas (confirmación, reprogramación, cancelación).
Son informativos: si fallan se registra el error y la operación se mantiene.
"""

import logging

from app.models.biometric.appointment import BiometricAppointment
from app.models.users.user import User
from app.services.externals.email_service import EmailNotifier

logger = logging.getLogger(__name__)


async def send_appointment_email(
    notifier: EmailNotifier,
    template: str,
    user: User,
    appointment: BiometricAppointment,
) -> bool:
    appointment_date = appointment.appointment_date
    location = appointment.location

    sent = await notifier.send_best_effort(
        template,
        user.email,
        user_name=user.full_name,
        date=f"{appointment_date:%A, %B} {appointment_date.day}, {appointment_date.year}",
        time=appointment.appointment_time,
        location=location.name if location else "",
        address=location.address if location else "",
        phone=location.phone if location else None,
    )
    if sent:
        logger.info(f"✅ Email '{template}' de la cita {appointment.id} enviado a {user.email}")
    return sent
