"""
Excepciones personalizadas para el almacén de entidades.

Estas excepciones proporcionan una forma estructurada de manejar errores del
almacén (validación, registros inexistentes, fallos del medio persistente)
y mapearlos a códigos de estado HTTP apropiados en la capa de API.
"""

from typing import Optional, Any


class AppException(Exception):
    """Excepción base para todos los errores de la aplicación."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Excepción cuando no existe un registro vivo (no eliminado) con el ID dado."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} no encontrado"
        if identifier:
            message += f": {identifier}"
        super().__init__(message=message, status_code=404, details=details)


class ValidationException(AppException):
    """
    Excepción para errores de validación.

    Lleva los mensajes por campo en ``errors`` (y también en
    ``details["errors"]`` para la capa HTTP).
    """

    def __init__(
        self,
        message: str = "Validación fallida",
        errors: Optional[dict[str, str]] = None,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.errors = dict(errors or {})
        if field and field not in self.errors:
            self.errors[field] = message
        details = details or {}
        if self.errors:
            details["errors"] = self.errors
        super().__init__(message=message, status_code=422, details=details)


class StorageException(AppException):
    """Excepción cuando el medio persistente falla de forma irrecuperable."""

    def __init__(
        self,
        message: str = "Error del almacenamiento persistente",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=500, details=details)
