""" Utilidades principales y componentes compartidos del almacén de entidades.

Este paquete contiene:

- Excepciones personalizadas
- Pipeline de consultas (filtros, búsqueda, ordenamiento)
- Funciones auxiliares de paginación
- Identificadores, marcas de auditoría y CSV
"""

from .exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    StorageException,
)
from .pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    ListResult,
    PaginationMeta,
    apply_pagination,
    calculate_pagination_meta,
    calculate_skip,
    clamp_page_size,
)
from .query import (
    FilterCondition,
    FilterOperator,
    ListParams,
    apply_filters,
    apply_sorting,
    run_query,
)
from .utils import (
    generate_id,
    create_timestamps,
    update_timestamps,
)

__all__ = [
    # Excepciones
    "AppException",
    "NotFoundException",
    "ValidationException",
    "StorageException",
    # paginacion
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "ListResult",
    "PaginationMeta",
    "apply_pagination",
    "calculate_pagination_meta",
    "calculate_skip",
    "clamp_page_size",
    # consultas
    "FilterCondition",
    "FilterOperator",
    "ListParams",
    "apply_filters",
    "apply_sorting",
    "run_query",
    # utils
    "generate_id",
    "create_timestamps",
    "update_timestamps",
]
