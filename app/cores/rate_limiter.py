"""
Límite de peticiones por IP (slowapi).

Es una barrera gruesa contra abuso de los endpoints que envían correos; el
tiempo de espera entre códigos de un mismo usuario lo aplica CodeIssuer.
En pruebas se desactiva con RATE_LIMIT_ENABLED=false.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from app.configs.settings import settings

SEND_CODE_LIMIT = "10/minute"
LOGIN_LIMIT = "20/minute"
DEFAULT_LIMIT = "100/minute"


def get_client_ip(request: Request) -> str:
    """IP del cliente; detrás de un proxy se toma el primer salto de X-Forwarded-For."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[DEFAULT_LIMIT],
    storage_uri="memory://",
    headers_enabled=False,
    enabled=settings.RATE_LIMIT_ENABLED,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Too many requests. Please try again later.",
            "errorCode": "RATE_LIMITED",
            "detail": f"Limit exceeded: {exc.detail}",
        },
    )
