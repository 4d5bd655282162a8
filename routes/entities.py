"""
Entity routes (Controllers) - Layered Architecture.

One generic router exposes the CRUD contract of every registered namespace
under ``/entities/{namespace}``. All business logic is delegated to the
EntityService of the namespace.

Responsibilities:
- Parse HTTP requests (query parameters, JSON filters, CSV bodies)
- Delegate to service layer
- Format HTTP responses
- Handle errors and status codes
"""

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from typing import Any, Literal, Optional
import json
import logging

from core.exceptions import AppException, ValidationException
from core.query import ListParams
from models.common import BaseEntity, MutationResult, DeleteResult, ImportResult, create_list_response
from services.base_service import EntityService
from dependencies import get_entity_service, get_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entities/{namespace}", tags=["entities"])


# ==================== Exception Handler ====================

def handle_service_exception(e: Exception) -> HTTPException:
    """Convert service layer exceptions to HTTP exceptions."""
    if isinstance(e, ValidationException):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "errors": e.errors}
        )
    elif isinstance(e, AppException):
        return HTTPException(
            status_code=e.status_code,
            detail=e.message
        )
    else:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor"
        )


def parse_filters(filters: Optional[str]) -> dict[str, Any]:
    """Decode the ``filters`` query parameter (a JSON object)."""
    if not filters:
        return {}
    try:
        decoded = json.loads(filters)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="filters debe ser un objeto JSON válido"
        )
    if not isinstance(decoded, dict):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="filters debe ser un objeto JSON"
        )
    return decoded


def build_list_params(
    page: Optional[int] = Query(None, description="Número de página (1-indexed)"),
    page_size: Optional[int] = Query(None, description="Tamaño de página (se acota a 1..100)"),
    q: Optional[str] = Query(None, description="Texto libre sobre los campos de búsqueda"),
    sort_by: Optional[str] = Query(None, description="Campo de ordenamiento"),
    sort_dir: Literal["asc", "desc"] = Query("asc", description="Dirección del ordenamiento"),
    filters: Optional[str] = Query(None, description='Filtros JSON, p. ej. {"qty": {"operator": "gte", "value": 2}}'),
) -> ListParams:
    """Collect the list query parameters into ListParams."""
    return ListParams(
        page=page,
        page_size=page_size,
        q=q,
        sort_by=sort_by,
        sort_dir=sort_dir,
        filters=parse_filters(filters),
    )


# ==================== Endpoints ====================

@router.get("/")
async def listar_registros(
    params: ListParams = Depends(build_list_params),
    service: EntityService = Depends(get_entity_service),
):
    """
    List live records of a namespace.

    Args:
        params: Search, filter, sort and pagination parameters
        service: Injected EntityService

    Returns:
        Page of records with the filtered total and pagination metadata
    """
    try:
        return create_list_response(service.list(params))
    except AppException as e:
        raise handle_service_exception(e)


@router.get("/export")
async def exportar_registros(
    params: ListParams = Depends(build_list_params),
    service: EntityService = Depends(get_entity_service),
):
    """Export the requested page as CSV."""
    try:
        content = service.export_csv(params)
    except AppException as e:
        raise handle_service_exception(e)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{service.namespace}.csv"'},
    )


@router.get("/template")
async def plantilla_importacion(service: EntityService = Depends(get_entity_service)):
    """CSV header template for imports."""
    return Response(
        content=service.template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{service.namespace}-template.csv"'},
    )


@router.post("/import", response_model=ImportResult)
async def importar_registros(
    request: Request,
    service: EntityService = Depends(get_entity_service),
    user_id: Optional[str] = Depends(get_user_id),
):
    """
    Import records from a CSV body (one record per row).

    Invalid rows are skipped and reported in ``errors``.
    """
    raw = await request.body()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="El CSV debe estar codificado en UTF-8"
        )
    try:
        return service.import_csv(text, user_id=user_id)
    except AppException as e:
        raise handle_service_exception(e)


@router.get("/{record_id}", response_model=BaseEntity)
async def obtener_registro(
    record_id: str,
    service: EntityService = Depends(get_entity_service),
):
    """
    Get a live record by ID.

    Returns:
        The record, or 404 if it does not exist or was deleted
    """
    try:
        item = service.get(record_id)
    except AppException as e:
        raise handle_service_exception(e)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{service.namespace} no encontrado: {record_id}"
        )
    return item


@router.post("/", response_model=MutationResult, status_code=status.HTTP_201_CREATED)
async def crear_registro(
    data: dict[str, Any] = Body(...),
    service: EntityService = Depends(get_entity_service),
    user_id: Optional[str] = Depends(get_user_id),
):
    """
    Create a record.

    Args:
        data: Domain fields (envelope fields are ignored)
        service: Injected EntityService
        user_id: Actor from the X-User-Id header

    Returns:
        Assigned ID and full record
    """
    try:
        return service.create(data, user_id=user_id)
    except AppException as e:
        raise handle_service_exception(e)


@router.patch("/{record_id}", response_model=MutationResult)
async def actualizar_registro(
    record_id: str,
    data: dict[str, Any] = Body(...),
    service: EntityService = Depends(get_entity_service),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Partially update a live record."""
    try:
        return service.update(record_id, data, user_id=user_id)
    except AppException as e:
        raise handle_service_exception(e)


@router.delete("/{record_id}", response_model=DeleteResult)
async def eliminar_registro(
    record_id: str,
    service: EntityService = Depends(get_entity_service),
    user_id: Optional[str] = Depends(get_user_id),
):
    """Soft delete a live record."""
    try:
        return service.remove(record_id, user_id=user_id)
    except AppException as e:
        raise handle_service_exception(e)
