"""
Excepciones del pipeline Splash -> Webflow.

- AuthError: Splash rechazó el intercambio de credenciales (fatal).
- TransportError: fallo HTTP contra Splash o Webflow. Fatal en lecturas
  (schema, listado, escaneo de dedup); en escrituras se registra por record.
- MappingError: reservado. La proyección degrada a omitir el campo.
- SyncConfigError: configuración incompleta o schema inutilizable.
"""
from typing import Any, Optional

from eventsync.shared.exceptions.base import AppException


class SyncException(AppException):
    """Excepción base para errores del sync."""

    def __init__(self, message: str, status_code: int = 500, error_code: str = "SYNC_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details
        )
        self.stage: Optional[str] = None

    def at_stage(self, stage: str) -> "SyncException":
        """Anota la etapa del pipeline donde ocurrió el error."""
        self.stage = stage
        self.details["stage"] = stage
        return self


class AuthError(SyncException):
    """Intercambio de credenciales rechazado por la fuente."""

    def __init__(self, service: str, status: Optional[int], body: str):
        super().__init__(
            message=f"{service}: autenticación rechazada ({status}): {body}",
            status_code=502,
            error_code="UPSTREAM_AUTH_FAILED",
            details={"service": service, "upstream_status": status, "body": body}
        )
        self.service = service
        self.status = status
        self.body = body


class TransportError(SyncException):
    """Error HTTP (o de red) hablando con un sistema externo."""

    def __init__(self, service: str, step: str, status: Optional[int], body: str):
        super().__init__(
            message=f"{service}: {step} falló ({status}): {body}",
            status_code=502,
            error_code="UPSTREAM_REQUEST_FAILED",
            details={"service": service, "step": step, "upstream_status": status, "body": body}
        )
        self.service = service
        self.step = step
        self.status = status
        self.body = body


class MappingError(SyncException):
    """No se pudo proyectar un record al schema destino."""

    def __init__(self, message: str, field: Any = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            status_code=422,
            error_code="MAPPING_ERROR",
            details=details
        )


class SyncConfigError(SyncException):
    """Error de configuración del pipeline."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        details = {"missing": missing} if missing else None
        super().__init__(
            message=message,
            status_code=500,
            error_code="SYNC_CONFIG_ERROR",
            details=details
        )
