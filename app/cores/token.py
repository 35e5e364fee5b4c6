from datetime import datetime, timedelta, UTC
from fastapi import HTTPException
from jose import JWTError, jwt
import secrets
import string

from app.configs.settings import settings


SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24
REFRESH_TOKEN_EXPIRE_DAYS = 30

VERIFICATION_CODE_LENGTH = 6


"""
Genera un token JWT codificado con la información proporcionada en `data`.
    - El token incluye la clave de expiración "exp" para validar su vigencia.
    - El tipo ("access" o "refresh") viaja en el claim "type".
"""
def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(UTC) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"type": "access", "exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_refresh_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(UTC) + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"type": "refresh", "exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def verify_token(token: str):
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def generate_verification_code(length: int = VERIFICATION_CODE_LENGTH) -> str:
    """Genera un código numérico aleatorio; incluye códigos con ceros a la izquierda (000000-999999)"""
    return ''.join(secrets.choice(string.digits) for _ in range(length))
