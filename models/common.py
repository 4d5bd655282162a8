"""
Modelos comunes del almacén y de respuesta para la API.

Estos modelos proporcionan el sobre común de todos los registros y
respuestas consistentes para todos los endpoints.
"""
from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from utils.datetime_utils import get_local_now
from core.pagination import ListResult, calculate_pagination_meta

#campos que administra el almacén; se ignoran en payloads de create/update
ENVELOPE_FIELDS = ("id", "created_at", "updated_at", "created_by", "updated_by", "is_deleted")


class BaseEntity(BaseModel):
    """Sobre común de todo registro de dominio."""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Identificador opaco e inmutable")
    created_at: str = Field(..., description="Fecha de creación (ISO-8601)")
    updated_at: str = Field(..., description="Fecha de última modificación (ISO-8601)")
    created_by: Optional[str] = Field(None, description="Usuario que creó el registro")
    updated_by: Optional[str] = Field(None, description="Usuario de la última modificación")
    is_deleted: bool = Field(False, description="Marca de soft delete")


class MutationResult(BaseModel):
    """Resultado de create/update: ID y registro completo."""
    id: str
    data: dict[str, Any]


class DeleteResult(BaseModel):
    """Resultado de remove (siempre soft delete)."""
    success: bool = True


class ImportResult(BaseModel):
    """Resultado de una importación CSV."""
    job_id: str
    imported: int = 0
    errors: Optional[List[str]] = None


class ErrorResponse(BaseModel):
    """Respuesta estándar de error."""
    success: bool = Field(False, description="Indica que la operación falló")
    error: str = Field(..., description="Tipo de error")
    message: str = Field(..., description="Mensaje descriptivo del error")
    details: Optional[dict] = Field(None, description="Detalles adicionales del error")
    timestamp: datetime = Field(default_factory=get_local_now, description="Timestamp de la respuesta")


class HealthCheckResponse(BaseModel):
    """Respuesta del health check."""
    status: str = Field(..., description="Estado general (healthy/unhealthy)")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión de la API")
    storage: str = Field(..., description="Estado del almacenamiento")
    environment: str = Field(..., description="Entorno (production/development)")
    timestamp: datetime = Field(default_factory=get_local_now)


def create_error_response(error: str, message: str, details: Optional[dict] = None) -> dict:
    """Helper para crear respuestas de error."""
    return ErrorResponse(error=error, message=message, details=details).model_dump(mode="json")


def create_list_response(result: ListResult) -> dict:
    """Helper para crear respuestas de listado con metadata de paginación."""
    pagination = calculate_pagination_meta(result.page, result.page_size, result.total)
    return {
        "success": True,
        "data": result.data,
        "total": result.total,
        "page": result.page,
        "page_size": result.page_size,
        "pagination": pagination.model_dump(),
    }
