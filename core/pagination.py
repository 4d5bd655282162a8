"""
Utilidades de paginación: última etapa del pipeline de consultas.

Las páginas son 1-indexed. El tamaño de página se acota a
[1, MAX_PAGE_SIZE]; la página no se acota, una página < 1 devuelve una
lista vacía.
"""

from typing import Any, Optional, Sequence
from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


class ListResult(BaseModel):
    """Resultado de un listado: página de registros y total filtrado."""
    data: list[dict[str, Any]] = Field(default_factory=list, description="Registros de la página")
    total: int = Field(0, ge=0, description="Total de coincidencias antes de paginar")
    page: int = Field(1, description="Página solicitada (1-indexed)")
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Tamaño de página efectivo")


class PaginationMeta(BaseModel):
    """Metadata para la paginacion."""
    page: int = Field(..., description="Current page number (1-indexed)")
    page_size: int = Field(..., ge=1, description="Page size")
    total_items: int = Field(..., ge=0, description="Total items available")
    total_pages: int = Field(..., ge=0, description="Total pages")
    has_next: bool = Field(..., description="Has next page")
    has_previous: bool = Field(..., description="Has previous page")


def clamp_page_size(page_size: Optional[int]) -> int:
    """
    Normaliza el tamaño de página.

    Args:
        page_size: Tamaño pedido (None usa DEFAULT_PAGE_SIZE)

    Returns:
        Tamaño acotado a [1, MAX_PAGE_SIZE]
    """
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(int(page_size), MAX_PAGE_SIZE))


def calculate_skip(page: int, page_size: int) -> int:
    """
    Calcula el offset de inicio de una página.

    Args:
        page: Número de página (1-indexed)
        page_size: Número de elementos por página

    Returns:
        Índice del primer elemento (negativo si page < 1)
    """
    return (page - 1) * page_size


def apply_pagination(
    data: Sequence[dict[str, Any]],
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> ListResult:
    """
    Corta una página de la colección ya filtrada y ordenada.

    Args:
        data: Registros filtrados y ordenados
        page: Número de página (1-indexed, None = 1)
        page_size: Tamaño de página (None = DEFAULT_PAGE_SIZE)

    Returns:
        ListResult con la página, el total filtrado y los parámetros efectivos
    """
    page = 1 if page is None else int(page)
    valid_page_size = clamp_page_size(page_size)
    start = calculate_skip(page, valid_page_size)

    # un inicio negativo no debe envolver hacia el final de la lista
    items = list(data[start:start + valid_page_size]) if start >= 0 else []

    return ListResult(
        data=items,
        total=len(data),
        page=page,
        page_size=valid_page_size,
    )


def calculate_pagination_meta(
    page: int,
    page_size: int,
    total_items: int
) -> PaginationMeta:
    """
    Calcula la metadata de la paginación.

    Args:
        page: Número de página actual (1-indexed)
        page_size: Items por página
        total_items: Total number of items

    Returns:
        paginationmeta objeto con valores calculados
    """
    total_pages = (total_items + page_size - 1) // page_size if page_size > 0 else 0

    return PaginationMeta(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_previous=page > 1
    )
