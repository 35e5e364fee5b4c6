"""
Configuración de SQLAlchemy para trabajar con base de datos de forma asincrónica.
Soporta SQLite (desarrollo y pruebas) y Postgres (producción) según variable de entorno.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from app.configs.settings import settings

# Obtener la URL de la base de datos desde settings (.env)
DATABASE_URL = settings.SQLALCHEMY_DATABASE_URI

# Configurar argumentos según el tipo de base de datos
engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    # SQLite requiere check_same_thread=False para async
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if ":memory:" in DATABASE_URL:
        # Una sola conexión compartida, si no cada conexión ve una base vacía
        engine_kwargs["poolclass"] = StaticPool

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    **engine_kwargs
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

Base = declarative_base()
