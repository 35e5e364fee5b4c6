"""Repositorio de citas biométricas."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.biometric.appointment import AppointmentStatus, BiometricAppointment

SCHEDULED = AppointmentStatus.SCHEDULED.value


class AppointmentRepository:
    """Una consulta por método; ninguna construye filtros dinámicos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_scheduled_for_user(self, user_uid: str) -> BiometricAppointment | None:
        result = await self.db.execute(
            select(BiometricAppointment)
            .options(selectinload(BiometricAppointment.location))
            .where(
                BiometricAppointment.user_uid == user_uid,
                BiometricAppointment.status == SCHEDULED,
            )
            .order_by(BiometricAppointment.id.desc())
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def find_latest_for_user(self, user_uid: str) -> BiometricAppointment | None:
        result = await self.db.execute(
            select(BiometricAppointment)
            .options(selectinload(BiometricAppointment.location))
            .where(BiometricAppointment.user_uid == user_uid)
            .order_by(BiometricAppointment.created_at.desc(), BiometricAppointment.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def count_scheduled(
        self,
        location_id: int,
        appointment_date: date,
        appointment_time: str,
        exclude_id: int | None = None,
    ) -> int:
        query = select(func.count(BiometricAppointment.id)).where(
            BiometricAppointment.location_id == location_id,
            BiometricAppointment.appointment_date == appointment_date,
            BiometricAppointment.appointment_time == appointment_time,
            BiometricAppointment.status == SCHEDULED,
        )
        if exclude_id is not None:
            query = query.where(BiometricAppointment.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def count_scheduled_by_time(self, location_id: int, appointment_date: date) -> Dict[str, int]:
        """Citas programadas por hora de inicio para una sede y fecha."""
        result = await self.db.execute(
            select(BiometricAppointment.appointment_time).where(
                BiometricAppointment.location_id == location_id,
                BiometricAppointment.appointment_date == appointment_date,
                BiometricAppointment.status == SCHEDULED,
            )
        )
        return dict(Counter(result.scalars().all()))

    async def create(
        self,
        user_uid: str,
        location_id: int,
        appointment_date: date,
        appointment_time: str,
        now: datetime,
    ) -> BiometricAppointment:
        appointment = BiometricAppointment(
            user_uid=user_uid,
            location_id=location_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            status=SCHEDULED,
            created_at=now,
            updated_at=now,
        )
        self.db.add(appointment)
        await self.db.flush()
        return appointment

    async def move(
        self,
        appointment: BiometricAppointment,
        location_id: int,
        appointment_date: date,
        appointment_time: str,
        now: datetime,
    ) -> BiometricAppointment:
        """Sobrescribe sede, fecha y hora de la misma fila (mismo id)."""
        appointment.location_id = location_id
        appointment.appointment_date = appointment_date
        appointment.appointment_time = appointment_time
        appointment.updated_at = now
        await self.db.flush()
        return appointment

    async def set_status(self, appointment: BiometricAppointment, status: str, now: datetime) -> None:
        appointment.status = status
        appointment.updated_at = now
        await self.db.flush()

    async def reload(self, appointment_id: int) -> BiometricAppointment | None:
        """Vuelve a leer la cita con su sede cargada."""
        result = await self.db.execute(
            select(BiometricAppointment)
            .options(selectinload(BiometricAppointment.location))
            .where(BiometricAppointment.id == appointment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
