"""
Modelos base de las respuestas: {"success", "message", "data"}.
Los campos se exponen en camelCase y se aceptan también en snake_case.
"""

from datetime import datetime
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.cores.clock import as_utc

T = TypeVar("T")

# SQLite devuelve fechas sin zona horaria; en las respuestas siempre van en UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None


class MessageResponse(CamelModel):
    success: bool
    message: str
