import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.db import async_session
from app.models.biometric.location import BiometricLocation
from app.models.biometric.time_slot import AppointmentTimeSlot

logger = logging.getLogger(__name__)

LOCATIONS = [
    {
        "name": "Port Moresby Central Office",
        "address": "123 Independence Drive, Port Moresby",
        "electorate": "Moresby North-East",
        "phone": "+675 321 4000",
        "operating_hours": "Mon-Fri 9:00 AM - 4:00 PM",
    },
    {
        "name": "Lae Branch Office",
        "address": "456 Markham Road, Lae",
        "electorate": "Lae",
        "phone": "+675 472 1000",
        "operating_hours": "Mon-Fri 9:00 AM - 4:00 PM",
    },
    {
        "name": "Mount Hagen Service Centre",
        "address": "12 Okuk Highway, Mount Hagen",
        "electorate": "Hagen Open",
        "phone": "+675 542 1200",
        "operating_hours": "Mon-Fri 9:00 AM - 4:00 PM",
    },
]

# Bloques de 30 minutos de 09:00 a 16:00 sin la hora de almuerzo
SLOT_TIMES = [
    ("09:00", "09:30"), ("09:30", "10:00"), ("10:00", "10:30"), ("10:30", "11:00"),
    ("11:00", "11:30"), ("11:30", "12:00"), ("13:00", "13:30"), ("13:30", "14:00"),
    ("14:00", "14:30"), ("14:30", "15:00"), ("15:00", "15:30"), ("15:30", "16:00"),
]
SLOT_CAPACITY = 2


def build_time_slots(location_id: int) -> list:
    return [
        AppointmentTimeSlot(
            location_id=location_id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            max_appointments=SLOT_CAPACITY,
            is_active=True,
        )
        for day_of_week in range(1, 6)
        for start, end in SLOT_TIMES
    ]


async def create_locations():
    db: AsyncSession = async_session()
    try:
        result = await db.execute(select(BiometricLocation))
        if result.scalars().first():
            logger.info("Las sedes biométricas ya existen")
            return

        for data in LOCATIONS:
            location = BiometricLocation(**data, is_active=True)
            db.add(location)
            await db.flush()
            db.add_all(build_time_slots(location.id))

        await db.commit()
        logger.info(f"✅ {len(LOCATIONS)} sedes biométricas creadas con sus horarios")
    except Exception as e:
        await db.rollback()
        logger.error(f"❌ Error al crear sedes biométricas: {e}")
    finally:
        await db.close()
