from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.apis.deps import (
    get_availability_calculator,
    get_booking_engine,
    get_cancellation_service,
    get_db,
    get_reschedule_engine,
    public_access,
)
from app.schemas.biometric.appointment_schema import (
    AppointmentData,
    AppointmentRequest,
    LocationData,
    UserAppointmentData,
    UserRequest,
)
from app.schemas.biometric.availability_schema import AvailabilityData, AvailabilityRequest, SlotAvailabilityData
from app.schemas.common.response_schema import ApiResponse
from app.services.biometric.appointment_service import get_active_locations, get_user_appointment
from app.services.biometric.availability_service import AvailabilityCalculator
from app.services.biometric.booking_service import BookingEngine
from app.services.biometric.cancellation_service import CancellationService
from app.services.biometric.reschedule_service import RescheduleEngine


router = APIRouter()


"""
Ruta que calcula los cupos restantes por horario para una sede y fecha.
    - Solo lunes a viernes.
"""
@router.post("/availability", response_model=ApiResponse[AvailabilityData], dependencies=[Depends(public_access)])
async def availability(payload: AvailabilityRequest, calculator: AvailabilityCalculator = Depends(get_availability_calculator)):
    slots = await calculator.get_availability(payload.location_id, payload.appointment_date)
    return {
        "success": True,
        "message": "Availability retrieved successfully",
        "data": AvailabilityData(
            location_id=payload.location_id,
            appointment_date=payload.appointment_date,
            available_slots=[
                SlotAvailabilityData.model_validate({**asdict(slot), "id": slot.slot_id}) for slot in slots
            ],
        ),
    }


"""
Ruta para reservar una cita biométrica.
    - El usuario debe estar verificado y no tener otra cita programada.
    - Envía un correo de confirmación (si falla, la reserva se mantiene).
"""
@router.post("/book", response_model=ApiResponse[AppointmentData], dependencies=[Depends(public_access)])
async def book(payload: AppointmentRequest, engine: BookingEngine = Depends(get_booking_engine)):
    appointment = await engine.book(
        payload.user_uid,
        payload.location_id,
        payload.appointment_date,
        payload.appointment_time,
    )
    return {
        "success": True,
        "message": "Biometric appointment booked successfully",
        "data": AppointmentData.model_validate(appointment),
    }


@router.post("/reschedule", response_model=ApiResponse[AppointmentData], dependencies=[Depends(public_access)])
async def reschedule(payload: AppointmentRequest, engine: RescheduleEngine = Depends(get_reschedule_engine)):
    appointment = await engine.reschedule(
        payload.user_uid,
        payload.location_id,
        payload.appointment_date,
        payload.appointment_time,
    )
    return {
        "success": True,
        "message": "Appointment rescheduled successfully",
        "data": AppointmentData.model_validate(appointment),
    }


"""
Ruta para cancelar la cita del usuario.
    - Solo se permite hasta 24 horas antes de la cita.
"""
@router.post("/cancel", response_model=ApiResponse[AppointmentData], dependencies=[Depends(public_access)])
async def cancel(payload: UserRequest, service: CancellationService = Depends(get_cancellation_service)):
    appointment = await service.cancel(payload.user_uid)
    return {
        "success": True,
        "message": "Appointment cancelled successfully",
        "data": AppointmentData.model_validate(appointment),
    }


@router.post("/user-appointment", response_model=ApiResponse[UserAppointmentData], dependencies=[Depends(public_access)])
async def user_appointment(payload: UserRequest, db: AsyncSession = Depends(get_db)):
    appointment = await get_user_appointment(db, payload.user_uid)
    return {
        "success": True,
        "message": "Appointment retrieved" if appointment else "No scheduled appointment",
        "data": UserAppointmentData(
            has_appointment=appointment is not None,
            appointment=AppointmentData.model_validate(appointment) if appointment else None,
        ),
    }


@router.get("/locations", response_model=ApiResponse[List[LocationData]], dependencies=[Depends(public_access)])
async def locations(db: AsyncSession = Depends(get_db)):
    active_locations = await get_active_locations(db)
    return {
        "success": True,
        "message": "Locations retrieved successfully",
        "data": [LocationData.model_validate(location) for location in active_locations],
    }
