"""
Configuración para enviar correos electrónicos usando FastAPI-Mail.
Carga los parámetros desde la configuración global de la aplicación.
"""

from fastapi_mail import ConnectionConfig
from app.configs.settings import settings


"""
Configura la conexión al servidor SMTP con las credenciales y parámetros de seguridad.
Incluye:
  - Usuario y contraseña para autenticación (solo si hay usuario configurado).
  - Datos del servidor y puerto.
  - Uso de TLS o SSL según configuración.
  - SUPPRESS_SEND para entornos sin servidor SMTP.
"""
conf = ConnectionConfig(
    MAIL_USERNAME=settings.MAIL_USERNAME,
    MAIL_PASSWORD=settings.MAIL_PASSWORD,
    MAIL_FROM=settings.MAIL_FROM,
    MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
    MAIL_PORT=settings.MAIL_PORT,
    MAIL_SERVER=settings.MAIL_SERVER,
    MAIL_STARTTLS=settings.MAIL_STARTTLS,
    MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
    USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
    VALIDATE_CERTS=True,
    SUPPRESS_SEND=1 if settings.MAIL_SUPPRESS_SEND else 0,
)
