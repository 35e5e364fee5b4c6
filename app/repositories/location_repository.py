"""Repositorio de sedes biométricas y sus horarios (datos de referencia, solo lectura)."""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.biometric.location import BiometricLocation
from app.models.biometric.time_slot import AppointmentTimeSlot


class LocationRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active(self) -> List[BiometricLocation]:
        result = await self.db.execute(
            select(BiometricLocation)
            .where(BiometricLocation.is_active == True)  # noqa: E712
            .order_by(BiometricLocation.id)
        )
        return list(result.scalars().all())

    async def get_active(self, location_id: int) -> BiometricLocation | None:
        result = await self.db.execute(
            select(BiometricLocation).where(
                BiometricLocation.id == location_id,
                BiometricLocation.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def get(self, location_id: int) -> BiometricLocation | None:
        return await self.db.get(BiometricLocation, location_id)

    async def list_slots(self, location_id: int, day_of_week: int) -> List[AppointmentTimeSlot]:
        """Horarios activos de la sede para un día de la semana, ordenados por hora de inicio."""
        result = await self.db.execute(
            select(AppointmentTimeSlot)
            .where(
                AppointmentTimeSlot.location_id == location_id,
                AppointmentTimeSlot.day_of_week == day_of_week,
                AppointmentTimeSlot.is_active == True,  # noqa: E712
            )
            .order_by(AppointmentTimeSlot.start_time)
        )
        return list(result.scalars().all())

    async def find_slot(
        self,
        location_id: int,
        day_of_week: int,
        start_time: str,
        for_update: bool = False,
    ) -> AppointmentTimeSlot | None:
        """
        Horario activo que empieza a `start_time`.

        Con `for_update=True` bloquea la fila hasta el fin de la transacción
        (SELECT ... FOR UPDATE en Postgres; SQLite ya serializa las escrituras).
        """
        query = select(AppointmentTimeSlot).where(
            AppointmentTimeSlot.location_id == location_id,
            AppointmentTimeSlot.day_of_week == day_of_week,
            AppointmentTimeSlot.start_time == start_time,
            AppointmentTimeSlot.is_active == True,  # noqa: E712
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalars().first()
