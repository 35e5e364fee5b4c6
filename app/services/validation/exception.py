from typing import NoReturn
from fastapi import status

from app.cores.exceptions import ApiError


# Códigos de verificación

async def rate_limited_exception(cooldown_seconds: int, message: str) -> NoReturn:
    raise ApiError(
        status.HTTP_429_TOO_MANY_REQUESTS,
        message,
        "RATE_LIMITED",
        headers={"Retry-After": str(cooldown_seconds)},
        extra={"cooldownSeconds": cooldown_seconds},
    )

async def dispatch_failed_exception() -> NoReturn:
    raise ApiError(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Failed to send verification code to email",
        "DISPATCH_FAILED",
    )

async def code_not_found_exception(message: str = "No verification code found. Please request a new code.") -> NoReturn:
    raise ApiError(status.HTTP_404_NOT_FOUND, message, "NO_CODE_FOUND")

async def code_used_exception(message: str = "Verification code has already been used. Please request a new code.") -> NoReturn:
    raise ApiError(status.HTTP_409_CONFLICT, message, "CODE_USED")

async def code_expired_exception(message: str = "Verification code has expired. Please request a new code.") -> NoReturn:
    raise ApiError(status.HTTP_410_GONE, message, "CODE_EXPIRED")

async def too_many_attempts_exception(message: str = "Too many incorrect attempts. Please request a new code.") -> NoReturn:
    raise ApiError(status.HTTP_429_TOO_MANY_REQUESTS, message, "TOO_MANY_ATTEMPTS")

async def invalid_code_exception(attempts_left: int) -> NoReturn:
    raise ApiError(
        status.HTTP_400_BAD_REQUEST,
        f"Invalid verification code. {attempts_left} attempts remaining.",
        "INVALID_CODE",
        extra={"attemptsLeft": attempts_left},
    )


# Usuarios

async def user_not_found_exception() -> NoReturn:
    raise ApiError(status.HTTP_404_NOT_FOUND, "User not found", "USER_NOT_FOUND")

async def not_verified_exception(message: str) -> NoReturn:
    raise ApiError(status.HTTP_403_FORBIDDEN, message, "NOT_VERIFIED")

async def invalid_credentials_exception() -> NoReturn:
    raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid email or password", "INVALID_CREDENTIALS")

async def missing_fields_exception(message: str) -> NoReturn:
    raise ApiError(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")


# Citas biométricas

async def location_not_found_exception() -> NoReturn:
    raise ApiError(status.HTTP_404_NOT_FOUND, "Location not found", "LOCATION_NOT_FOUND")

async def weekend_unavailable_exception() -> NoReturn:
    raise ApiError(
        status.HTTP_400_BAD_REQUEST,
        "Appointments are only available Monday through Friday",
        "WEEKEND_UNAVAILABLE",
    )

async def already_booked_exception() -> NoReturn:
    raise ApiError(
        status.HTTP_409_CONFLICT,
        "You already have a biometric appointment scheduled",
        "ALREADY_BOOKED",
    )

async def invalid_date_exception(message: str) -> NoReturn:
    raise ApiError(status.HTTP_400_BAD_REQUEST, message, "INVALID_DATE")

async def invalid_slot_exception() -> NoReturn:
    raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid time slot selected", "INVALID_SLOT")

async def slot_full_exception() -> NoReturn:
    raise ApiError(
        status.HTTP_409_CONFLICT,
        "This time slot is fully booked. Please select another time.",
        "SLOT_FULL",
    )

async def no_appointment_to_reschedule_exception() -> NoReturn:
    raise ApiError(
        status.HTTP_404_NOT_FOUND,
        "No scheduled appointment found to reschedule",
        "NO_APPOINTMENT_TO_RESCHEDULE",
    )

async def no_appointment_exception() -> NoReturn:
    raise ApiError(status.HTTP_404_NOT_FOUND, "No appointment found to cancel", "NO_APPOINTMENT")

async def appointment_not_active_exception(current_status: str) -> NoReturn:
    raise ApiError(
        status.HTTP_409_CONFLICT,
        f"Appointment is already {current_status}",
        "APPOINTMENT_NOT_ACTIVE",
    )

async def too_late_to_cancel_exception(notice_hours: int) -> NoReturn:
    raise ApiError(
        status.HTTP_400_BAD_REQUEST,
        f"Cannot cancel appointment less than {notice_hours} hours before scheduled time",
        "TOO_LATE_TO_CANCEL",
    )
