# userboard/core/errors.py
from __future__ import annotations


class ServiceError(Exception):
    """
    Error detectado en la capa de servicio.
    El router lo traduce a HTTPException(status_code, detail=message).
    """
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError, ValueError):
    status_code = 400


class ConflictError(ServiceError):
    status_code = 409


class StoreError(ServiceError):
    status_code = 500
