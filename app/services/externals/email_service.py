"""
Servicio de envío de correos (notificador externo).
Los emisores de códigos necesitan saber si el envío falló para invalidar el código,
por eso `send_template` lanza NotificationError en lugar de tragarse la excepción.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi_mail import FastMail, MessageSchema, MessageType

from app.cores.html_sanitizer import HTMLSanitizer
from app.external.email_config import conf
from app.external.email_templates import TEMPLATES

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """El correo no pudo enviarse."""


@dataclass
class EmailNotifier:
    mailer: Optional[FastMail] = field(default_factory=lambda: FastMail(conf))

    async def send_template(self, template: str, recipient: str, **context) -> None:
        render = TEMPLATES.get(template)
        if render is None:
            raise NotificationError(f"Unknown email template: {template}")

        # Nombres, sedes y direcciones pueden venir del cliente
        subject, body = render(**HTMLSanitizer.escape_context(context))
        message = MessageSchema(
            subject=subject,
            recipients=[recipient],
            body=body,
            subtype=MessageType.html,
        )
        try:
            await self.mailer.send_message(message)
        except Exception as e:
            logger.error(f"❌ Error enviando correo '{template}' a {recipient}: {str(e)}")
            raise NotificationError(str(e)) from e

        logger.info(f"✅ Correo '{template}' enviado a {recipient}")

    async def send_best_effort(self, template: str, recipient: str, **context) -> bool:
        """Envía sin propagar errores; para notificaciones que no deben revertir la operación."""
        try:
            await self.send_template(template, recipient, **context)
            return True
        except NotificationError:
            logger.warning(f"⚠️ No se pudo enviar el correo '{template}' a {recipient}; se continúa")
            return False
