from typing import Optional
from fastapi import HTTPException


class ApiError(HTTPException):
    """
    Error de negocio con código legible por máquina.
    Se renderiza como {"success": false, "message", "errorCode", ...extra}.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        headers: Optional[dict] = None,
        extra: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message
        self.error_code = error_code
        self.extra = extra or {}
