from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.apis.deps import (
    get_account_activation,
    get_db,
    get_email_verification,
    get_two_factor_login,
    public_access,
)
from app.cores.rate_limiter import LOGIN_LIMIT, SEND_CODE_LIMIT, get_client_ip, limiter
from app.models.common.verification_code import CodePurpose
from app.schemas.auths.activation_schema import (
    ActivateAccountRequest,
    ActivatedData,
    ActivationSentData,
    ActivationStateData,
    SendActivationRequest,
)
from app.schemas.auths.login_schema import LoginData, LoginRequest
from app.schemas.auths.two_factor_schema import (
    CompletedLoginData,
    CompleteLoginRequest,
    SendTwoFactorRequest,
    TwoFactorSentData,
    TwoFactorVerifiedData,
    UserData,
    VerifyTwoFactorRequest,
)
from app.schemas.auths.verification_schema import (
    CodeSentData,
    CodeStateData,
    CodeVerifiedData,
    EmailPurpose,
    SendVerificationCodeRequest,
    VerifyCodeRequest,
)
from app.schemas.common.response_schema import ApiResponse
from app.services.auths.activation_service import AccountActivation
from app.services.auths.login_service import login_user
from app.services.auths.two_factor_service import TwoFactorLogin
from app.services.auths.verification_service import EmailVerification


router = APIRouter()


"""
Ruta para enviar un código de verificación al correo.
    - Propósitos: registration (por defecto), password_reset, email_change.
    - Un nuevo código solo se emite 2 minutos después del anterior sin usar.
"""
@router.post("/send-verification-code", response_model=ApiResponse[CodeSentData], dependencies=[Depends(public_access)])
@limiter.limit(SEND_CODE_LIMIT)
async def send_verification_code(
    request: Request,
    payload: SendVerificationCodeRequest,
    service: EmailVerification = Depends(get_email_verification),
):
    issued = await service.send_code(
        payload.email,
        CodePurpose(payload.purpose),
        user_uid=payload.user_uid,
        user_name=payload.user_name,
    )
    return {
        "success": True,
        "message": "Verification code sent to your email",
        "data": CodeSentData(email=payload.email, purpose=payload.purpose, expires_at=issued.expires_at),
    }


"""
Ruta para verificar un código de 6 dígitos.
    - Al verificar un código de registro asociado a un usuario, marca su correo como verificado.
"""
@router.post("/verify-code", response_model=ApiResponse[CodeVerifiedData], dependencies=[Depends(public_access)])
async def verify_code(payload: VerifyCodeRequest, service: EmailVerification = Depends(get_email_verification)):
    verified = await service.verify_code(payload.email, payload.code, CodePurpose(payload.purpose))
    return {
        "success": True,
        "message": "Email verified successfully",
        "data": CodeVerifiedData(email=payload.email, purpose=payload.purpose, verified_at=verified.verified_at),
    }


@router.get("/verify-code", response_model=ApiResponse[CodeStateData], dependencies=[Depends(public_access)])
async def get_verification_status(
    email: str = Query(..., min_length=3),
    purpose: EmailPurpose = Query("registration"),
    service: EmailVerification = Depends(get_email_verification),
):
    state = await service.get_status(email, CodePurpose(purpose))
    return {
        "success": True,
        "message": "Verification status retrieved",
        "data": CodeStateData.model_validate(state),
    }


"""
Ruta para enviar el código de activación de cuenta (vigencia de 24 horas).
    - Acepta email o userUid; al menos uno es obligatorio.
"""
@router.post("/send-activation-email", response_model=ApiResponse[ActivationSentData], dependencies=[Depends(public_access)])
@limiter.limit(SEND_CODE_LIMIT)
async def send_activation_email(
    request: Request,
    payload: SendActivationRequest,
    service: AccountActivation = Depends(get_account_activation),
):
    issued = await service.send_activation(email=payload.email, user_uid=payload.user_uid)
    return {
        "success": True,
        "message": "Activation email sent successfully",
        "data": ActivationSentData(email=issued.recipient, expires_at=issued.expires_at),
    }


@router.post("/activate-account", response_model=ApiResponse[ActivatedData], dependencies=[Depends(public_access)])
async def activate_account(payload: ActivateAccountRequest, service: AccountActivation = Depends(get_account_activation)):
    result = await service.activate(payload.email, payload.code)
    return {
        "success": True,
        "message": "Account activated successfully. You can now log in.",
        "data": ActivatedData(
            user_uid=result.user_uid,
            email=result.email,
            activated_at=result.activated_at,
            can_login=True,
        ),
    }


@router.get("/activate-account", response_model=ApiResponse[ActivationStateData], dependencies=[Depends(public_access)])
async def get_activation_status(
    email: str = Query(..., min_length=3),
    service: AccountActivation = Depends(get_account_activation),
):
    state = await service.get_status(email)
    return {
        "success": True,
        "message": "Activation status retrieved",
        "data": ActivationStateData.model_validate({**asdict(state.code), "is_activated": state.is_activated}),
    }


"""
Ruta para iniciar sesión.
    - Verifica las credenciales y envía un código 2FA al correo del usuario.
    - El login se completa en /complete-2fa-login.
"""
@router.post("/login", response_model=ApiResponse[LoginData], dependencies=[Depends(public_access)])
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    two_factor: TwoFactorLogin = Depends(get_two_factor_login),
):
    result = await login_user(
        db,
        two_factor,
        payload.email,
        payload.password,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    if result.code_sent:
        message = "Verification code sent to your email. Enter the 6-digit code to complete login."
    else:
        message = f"A verification code was already sent. You can request a new one in {result.cooldown_seconds} seconds."
    return {
        "success": True,
        "message": message,
        "data": LoginData(
            uid=result.user.uid,
            email=result.user.email,
            code_sent=result.code_sent,
            cooldown_seconds=result.cooldown_seconds,
        ),
    }


@router.post("/send-2fa-code", response_model=ApiResponse[TwoFactorSentData], dependencies=[Depends(public_access)])
@limiter.limit(SEND_CODE_LIMIT)
async def send_two_factor_code(
    request: Request,
    payload: SendTwoFactorRequest,
    service: TwoFactorLogin = Depends(get_two_factor_login),
):
    issued = await service.send_code(
        payload.user_uid,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    return {
        "success": True,
        "message": "Verification code sent to your email",
        "data": TwoFactorSentData(user_uid=payload.user_uid, expires_at=issued.expires_at),
    }


@router.post("/verify-2fa-code", response_model=ApiResponse[TwoFactorVerifiedData], dependencies=[Depends(public_access)])
async def verify_two_factor_code(payload: VerifyTwoFactorRequest, service: TwoFactorLogin = Depends(get_two_factor_login)):
    verified = await service.verify_code(payload.user_uid, payload.code)
    return {
        "success": True,
        "message": "Verification successful",
        "data": TwoFactorVerifiedData(user_uid=payload.user_uid, verified_at=verified.verified_at),
    }


"""
Ruta que completa el login con 2FA.
    - Consume el código y devuelve el perfil del usuario con sus tokens de acceso.
"""
@router.post("/complete-2fa-login", response_model=ApiResponse[CompletedLoginData], dependencies=[Depends(public_access)])
async def complete_two_factor_login(payload: CompleteLoginRequest, service: TwoFactorLogin = Depends(get_two_factor_login)):
    completed = await service.complete_login(payload.user_uid, payload.code)
    return {
        "success": True,
        "message": "Login successful",
        "data": CompletedLoginData(
            user=UserData.model_validate(completed.user),
            access_token=completed.access_token,
            refresh_token=completed.refresh_token,
        ),
    }
