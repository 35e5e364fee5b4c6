import logging

from sqlalchemy import select

from app.configs.settings import settings
from app.cores.clock import utc_now
from app.cores.db import async_session
from app.cores.security import generate_uid, get_password_hash
from app.models.users.user import User

logger = logging.getLogger(__name__)


async def create_demo_user():
    """Usuario verificado para probar login y reservas; solo si DEMO_USER_EMAIL está configurado."""
    email = settings.DEMO_USER_EMAIL
    password = settings.DEMO_USER_PASSWORD
    if not email or not password:
        logger.info("DEMO_USER_EMAIL o DEMO_USER_PASSWORD no definidos, no se crea usuario demo")
        return

    async with async_session() as db:
        result = await db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            logger.info("El usuario demo ya existe")
            return

        now = utc_now()
        db.add(User(
            uid=generate_uid(),
            first_name="Test",
            last_name="User",
            email=email,
            nid="S1234567A",
            phone_number="+675 8123 4567",
            password=get_password_hash(password),
            email_verified=True,
            email_verified_at=now,
            is_verified=True,
            created_at=now,
            updated_at=now,
        ))
        await db.commit()
        logger.info(f"✅ Usuario demo {email} creado")
