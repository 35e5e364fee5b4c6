"""
Plantillas HTML de los correos de SevisPass.
Cada función recibe los datos del mensaje y devuelve (asunto, cuerpo html).
"""

from typing import Optional, Tuple

from app.configs.settings import settings


def _wrap(title: str, content: str) -> str:
    return f"""
    <html>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
        <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2 style="color: #b91c1c;">{title}</h2>
            {content}
            <p style="margin-top: 30px;">
                Regards,<br>
                <strong>The SevisPass Team</strong>
            </p>
            <p style="font-size: 12px; color: #888;">{settings.APP_BASE_URL}</p>
        </div>
    </body>
    </html>
    """


def _code_block(code: str) -> str:
    return f"""
    <div style="background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 20px 0; text-align: center;">
        <span style="font-size: 28px; letter-spacing: 6px; font-weight: bold;">{code}</span>
    </div>
    """


def _greeting(user_name: Optional[str]) -> str:
    return f"<p>Hello <strong>{user_name}</strong>,</p>" if user_name else "<p>Hello,</p>"


def render_verification_code(code: str, user_name: Optional[str] = None, expires_in: str = "10 minutes", **_) -> Tuple[str, str]:
    body = _wrap(
        "Verify your email address",
        f"""
        {_greeting(user_name)}
        <p>Use the following code to verify your email address:</p>
        {_code_block(code)}
        <p>This code expires in {expires_in}. If you did not request it, you can ignore this email.</p>
        """,
    )
    return "SevisPass Email Verification Code", body


def render_activation_code(code: str, user_name: Optional[str] = None, expires_in: str = "24 hours", **_) -> Tuple[str, str]:
    body = _wrap(
        "Activate your SevisPass account",
        f"""
        {_greeting(user_name)}
        <p>Enter this activation code to finish setting up your digital ID account:</p>
        {_code_block(code)}
        <p>This code expires in {expires_in}.</p>
        """,
    )
    return "Activate Your SevisPass Account - Verification Required", body


def render_two_factor_code(code: str, user_name: Optional[str] = None, expires_in: str = "10 minutes", **_) -> Tuple[str, str]:
    body = _wrap(
        "Login verification",
        f"""
        {_greeting(user_name)}
        <p>Someone is signing in to your SevisPass account. Use this code to complete the login:</p>
        {_code_block(code)}
        <p>This code expires in {expires_in}. If this was not you, change your password immediately.</p>
        """,
    )
    return "SevisPass Login Verification - 2FA Code", body


def _appointment_details(date: str, time: str, location: str, address: str, phone: Optional[str]) -> str:
    return f"""
    <div style="background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 20px 0;">
        <p><strong>Date:</strong> {date}</p>
        <p><strong>Time:</strong> {time}</p>
        <p><strong>Location:</strong> {location}</p>
        <p><strong>Address:</strong> {address}</p>
        <p><strong>Phone:</strong> {phone or 'N/A'}</p>
    </div>
    """


def render_appointment_confirmation(user_name: str, date: str, time: str, location: str, address: str, phone: Optional[str] = None, **_) -> Tuple[str, str]:
    body = _wrap(
        "Your biometric appointment is confirmed",
        f"""
        {_greeting(user_name)}
        <p>Your biometric data collection appointment has been booked:</p>
        {_appointment_details(date, time, location, address, phone)}
        <p>Please bring your identification documents and arrive 15 minutes early.</p>
        """,
    )
    return "Biometric Appointment Confirmed - SevisPass Digital ID", body


def render_appointment_reschedule(user_name: str, date: str, time: str, location: str, address: str, phone: Optional[str] = None, **_) -> Tuple[str, str]:
    body = _wrap(
        "Your biometric appointment has been rescheduled",
        f"""
        {_greeting(user_name)}
        <p>Your appointment now takes place at:</p>
        {_appointment_details(date, time, location, address, phone)}
        """,
    )
    return "Biometric Appointment Rescheduled - SevisPass Digital ID", body


def render_appointment_cancellation(user_name: str, date: str, time: str, location: str, address: str, phone: Optional[str] = None, **_) -> Tuple[str, str]:
    body = _wrap(
        "Your biometric appointment has been cancelled",
        f"""
        {_greeting(user_name)}
        <p>The following appointment was cancelled:</p>
        {_appointment_details(date, time, location, address, phone)}
        <p>You can book a new appointment at any time from your dashboard.</p>
        """,
    )
    return "Biometric Appointment Cancelled - SevisPass Digital ID", body


TEMPLATES = {
    "verification_code": render_verification_code,
    "activation_code": render_activation_code,
    "two_factor_code": render_two_factor_code,
    "appointment_confirmation": render_appointment_confirmation,
    "appointment_reschedule": render_appointment_reschedule,
    "appointment_cancellation": render_appointment_cancellation,
}
