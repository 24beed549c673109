"""
Excepción base para todas las excepciones de eventsync.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base de la aplicación.

    Lleva el status HTTP con el que la API debe responder y un payload
    serializable, para que CLI y API reporten el mismo error.
    """
    
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Cuerpo JSON que devuelve la API ante este error."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
