"""
Este bloque define la configuración de inicio (lifespan) y creación de la aplicación FastAPI.
Incluye tareas que deben ejecutarse al arrancar la aplicación, como la creación de tablas y datos iniciales.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from app.cores.db import Base, engine
from app.cores.environment import Environment, get_environment_from_settings
from app.cores.error_handlers import register_exception_handlers
from app.cores.rate_limiter import limiter, rate_limit_exceeded_handler

from app import models  # noqa: F401  registra las tablas en Base.metadata

from app.scripts.databases.create_locations import create_locations
from app.scripts.databases.create_demo_user import create_demo_user

from app.apis.auth_api import router as auth_router
from app.apis.biometric_api import router as biometric_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Función que se ejecuta al iniciar la aplicación.
    - Crea todas las tablas en la base de datos si no existen.
    - Inserta las sedes biométricas con sus horarios y, si está configurado, un usuario demo.
    - Al finalizar, continúa con la ejecución normal de la app (con `yield`).
    """
    async with engine.begin() as conn:
        # Crea las tablas en la base de datos
        await conn.run_sync(Base.metadata.create_all)
    await create_locations()
    await create_demo_user()

    yield

    await engine.dispose()

"""
    Función que construye y retorna la instancia principal de la aplicación FastAPI.
    - Valida el entorno: producción con ALLOW_INSECURE_BYPASS falla aquí, antes de aceptar peticiones.
    - Registra los handlers de errores y el limitador de peticiones.
    - Carga las rutas de autenticación y de citas biométricas.
"""


def create_app(environment: Environment | None = None) -> FastAPI:
    app = FastAPI(
        title="SevisPass",
        lifespan=lifespan
    )
    app.state.environment = environment or get_environment_from_settings()

    origins = [
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(biometric_router, prefix="/api/biometric", tags=["Biometric"])

    return app
