"""
Reglas de calendario compartidas por disponibilidad, reserva, reprogramación y cancelación.
Las fechas se interpretan en la zona horaria de la aplicación (APP_TIMEZONE).
"""

from datetime import date, datetime, time, timezone

from app.cores.clock import get_local_timezone

# 1=lunes .. 5=viernes, igual que AppointmentTimeSlot.day_of_week
LAST_WEEKDAY = 5


def get_day_of_week(appointment_date: date) -> int:
    return appointment_date.isoweekday()


def check_is_weekday(appointment_date: date) -> bool:
    return get_day_of_week(appointment_date) <= LAST_WEEKDAY


def get_local_today(now: datetime) -> date:
    return now.astimezone(get_local_timezone()).date()


def get_appointment_start(appointment_date: date, appointment_time: str) -> datetime:
    """Instante UTC en que empieza la cita ("HH:MM" en hora local)."""
    hours, minutes = (int(part) for part in appointment_time.split(":")[:2])
    naive = datetime.combine(appointment_date, time(hours, minutes))
    return get_local_timezone().localize(naive).astimezone(timezone.utc)
