"""
Valor único que describe el entorno de ejecución.

Los servicios reciben una instancia de `Environment` en lugar de leer variables
de entorno por su cuenta. `allow_insecure_bypass` relaja la invalidación de
códigos 2FA y el enfriamiento entre envíos para entornos que no son de
producción; un entorno de producción nunca puede construirse con el bypass activo.
"""

from pydantic import BaseModel, ConfigDict, model_validator

from app.configs.settings import settings

PRODUCTION = "production"


class Environment(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "development"
    allow_insecure_bypass: bool = False

    @model_validator(mode="after")
    def check_bypass_outside_production(self):
        if self.allow_insecure_bypass and self.is_production:
            raise ValueError("ALLOW_INSECURE_BYPASS cannot be enabled in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.name.lower() == PRODUCTION


def get_environment_from_settings() -> Environment:
    return Environment(
        name=settings.ENVIRONMENT,
        allow_insecure_bypass=settings.ALLOW_INSECURE_BYPASS,
    )
