from pydantic_settings import BaseSettings, SettingsConfigDict

"""
Se carga automáticamente desde el archivo `.env` o las variables de entorno del sistema.
    - Define y carga la configuración principal de la aplicación desde variables de entorno.
    - Incluye parámetros para la base de datos, seguridad, correo y el ciclo de vida de los códigos.
    - Configuracion global
"""
class Settings(BaseSettings):
    SQLALCHEMY_DATABASE_URI: str = "sqlite+aiosqlite:///./sevispass.db"
    SECRET_KEY: str

    # "development" | "staging" | "production"
    ENVIRONMENT: str = "development"
    # Nunca debe estar activo en producción (ver app/cores/environment.py)
    ALLOW_INSECURE_BYPASS: bool = False

    APP_BASE_URL: str = "http://localhost:8000"
    APP_TIMEZONE: str = "Pacific/Port_Moresby"

    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "no-reply@sevispass.gov.pg"
    MAIL_FROM_NAME: str = "SevisPass"
    MAIL_PORT: int = 587
    MAIL_SERVER: str = "localhost"
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False
    MAIL_SUPPRESS_SEND: bool = False

    RATE_LIMIT_ENABLED: bool = True

    VERIFICATION_CODE_EXPIRE_MINUTES: int = 10
    VERIFICATION_CODE_COOLDOWN_SECONDS: int = 120
    ACTIVATION_CODE_EXPIRE_HOURS: int = 24
    ACTIVATION_CODE_COOLDOWN_SECONDS: int = 300
    VERIFICATION_CODE_MAX_ATTEMPTS: int = 5
    CODE_RETENTION_HOURS: int = 1

    CANCELLATION_NOTICE_HOURS: int = 24

    DEMO_USER_EMAIL: str = ""
    DEMO_USER_PASSWORD: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
