from datetime import datetime
from typing import AsyncGenerator, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.cores.clock import utc_now
from app.cores.db import async_session
from app.cores.environment import Environment
from app.services.auths.activation_service import AccountActivation
from app.services.auths.code_issuer_service import CodeIssuer
from app.services.auths.code_verifier_service import CodeVerifier
from app.services.auths.two_factor_service import TwoFactorLogin
from app.services.auths.verification_service import EmailVerification
from app.services.biometric.availability_service import AvailabilityCalculator
from app.services.biometric.booking_service import BookingEngine
from app.services.biometric.cancellation_service import CancellationService
from app.services.biometric.reschedule_service import RescheduleEngine
from app.services.externals.email_service import EmailNotifier

"""
Este archivo define la función `get_db`, que proporciona una sesión de base de datos asincrónica.
Se usa como dependencia en rutas de FastAPI para interactuar con la base de datos sin preocuparse
por abrir o cerrar la conexión manualmente.
"""
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session = async_session()
    try:
        yield session
    finally:
        await session.close()

async def public_access():
    pass


"""
Colaboradores inyectados en los servicios. Las pruebas los reemplazan con
`app.dependency_overrides` (notificador falso, reloj controlado).
"""
def get_notifier() -> EmailNotifier:
    return EmailNotifier()

def get_clock() -> Callable[[], datetime]:
    return utc_now

def get_environment(request: Request) -> Environment:
    # Construido y validado una sola vez en create_app
    return request.app.state.environment


def get_code_issuer(
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
    environment: Environment = Depends(get_environment),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CodeIssuer:
    return CodeIssuer(db=db, notifier=notifier, environment=environment, clock=clock)

def get_code_verifier(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CodeVerifier:
    return CodeVerifier(db=db, clock=clock)

def get_email_verification(
    db: AsyncSession = Depends(get_db),
    issuer: CodeIssuer = Depends(get_code_issuer),
    verifier: CodeVerifier = Depends(get_code_verifier),
) -> EmailVerification:
    return EmailVerification(db=db, issuer=issuer, verifier=verifier)

def get_account_activation(
    db: AsyncSession = Depends(get_db),
    issuer: CodeIssuer = Depends(get_code_issuer),
    verifier: CodeVerifier = Depends(get_code_verifier),
) -> AccountActivation:
    return AccountActivation(db=db, issuer=issuer, verifier=verifier)

def get_two_factor_login(
    db: AsyncSession = Depends(get_db),
    issuer: CodeIssuer = Depends(get_code_issuer),
    verifier: CodeVerifier = Depends(get_code_verifier),
) -> TwoFactorLogin:
    return TwoFactorLogin(db=db, issuer=issuer, verifier=verifier)


def get_availability_calculator(db: AsyncSession = Depends(get_db)) -> AvailabilityCalculator:
    return AvailabilityCalculator(db=db)

def get_booking_engine(
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> BookingEngine:
    return BookingEngine(db=db, notifier=notifier, clock=clock)

def get_reschedule_engine(
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RescheduleEngine:
    return RescheduleEngine(db=db, notifier=notifier, clock=clock)

def get_cancellation_service(
    db: AsyncSession = Depends(get_db),
    notifier: EmailNotifier = Depends(get_notifier),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CancellationService:
    return CancellationService(db=db, notifier=notifier, clock=clock)
