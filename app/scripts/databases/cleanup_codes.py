"""
Limpieza periódica de códigos usados o expirados.
Uso: python -m app.scripts.databases.cleanup_codes
"""

import asyncio
import logging

from app.configs.settings import settings
from app.cores.clock import utc_now
from app.cores.db import async_session
from app.repositories.verification_code_repository import VerificationCodeRepository

logger = logging.getLogger(__name__)


async def cleanup_codes(older_than_hours: int = settings.CODE_RETENTION_HOURS) -> int:
    async with async_session() as db:
        removed = await VerificationCodeRepository(db).cleanup_expired(utc_now(), older_than_hours)
        await db.commit()
    logger.info(f"✅ {removed} códigos eliminados")
    return removed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(cleanup_codes())
