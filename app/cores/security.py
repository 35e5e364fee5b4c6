from datetime import datetime, timezone
from passlib.context import CryptContext
import secrets
import string


"""
Configura el contexto de hashing usando el algoritmo BCrypt.
Este contexto se usa internamente para hashear y verificar contraseñas.
"""
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=12
)


"""
Genera un hash seguro de la contraseña usando BCrypt.
Se utiliza al crear usuarios (scripts de datos iniciales) antes de guardarlos en la base de datos.
"""
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


"""
Verifica si una contraseña en texto plano coincide con un hash previamente generado.
Se usa durante el login, antes de enviar el código 2FA.
"""
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _to_base36(value: int) -> str:
    alphabet = string.digits + string.ascii_lowercase
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(alphabet[rem])
    return "".join(reversed(digits))


def generate_uid() -> str:
    """UID público del usuario: `<milisegundos en base36>-<16 hex>`"""
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"{_to_base36(millis)}-{secrets.token_hex(8)}"
