from datetime import datetime, timezone
import pytz

from app.configs.settings import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite devuelve fechas sin zona horaria; se asume que están en UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_local_timezone():
    return pytz.timezone(settings.APP_TIMEZONE)
