"""
Pipeline de consultas sobre una colección en memoria.

Etapas, siempre en este orden:

1. filtro de soft delete (``is_deleted``)
2. búsqueda de texto libre ``q`` sobre los campos de búsqueda
3. filtros por campo (igualdad, pertenencia u operador)
4. ordenamiento estable por un único campo
5. paginación (ver ``core.pagination``)

Todas las funciones son puras: no modifican la colección recibida y no
lanzan excepciones por datos heterogéneos.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ValidationException
from core.pagination import ListResult, apply_pagination

Record = dict[str, Any]


class FilterOperator(str, Enum):
    eq = "eq"
    contains = "contains"
    gte = "gte"
    lte = "lte"
    between = "between"


class FilterCondition(BaseModel):
    """Descriptor de filtro con operador: ``{operator, value | min | max}``."""
    model_config = ConfigDict(extra="ignore")

    operator: str = Field(..., description="eq, contains, gte, lte o between")
    value: Any = None
    min: Any = None
    max: Any = None


class ListParams(BaseModel):
    """Parámetros de un listado."""
    model_config = ConfigDict(extra="ignore")

    page: Optional[int] = Field(None, description="Página (1-indexed)")
    page_size: Optional[int] = Field(None, description="Tamaño de página")
    q: Optional[str] = Field(None, description="Texto libre a buscar")
    sort_by: Optional[str] = Field(None, description="Campo de ordenamiento")
    sort_dir: Literal["asc", "desc"] = Field("asc", description="Dirección del ordenamiento")
    filters: dict[str, Any] = Field(default_factory=dict, description="Filtros por campo")

    @field_validator("sort_dir", mode="before")
    @classmethod
    def default_sort_dir(cls, v: Any) -> Any:
        """Sin dirección explícita se ordena ascendente."""
        if v is None or v == "":
            return "asc"
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("filters", mode="before")
    @classmethod
    def default_filters(cls, v: Any) -> Any:
        return {} if v is None else v


FilterSpec = Union[FilterCondition, Mapping[str, Any], Sequence[Any], Any]

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _strict_equals(left: Any, right: Any) -> bool:
    # True == 1 en Python; aquí un booleano solo iguala a otro booleano
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _safe_compare(left: Any, right: Any, op: str) -> bool:
    try:
        if op == "gte":
            return left >= right
        return left <= right
    except TypeError:
        # valores no comparables (None contra número, str contra int...) no coinciden
        return False


def _is_empty_spec(spec: Any) -> bool:
    if spec is None or spec == "":
        return True
    return isinstance(spec, _COLLECTION_TYPES) and len(spec) == 0


def _as_condition(spec: Any) -> Optional[FilterCondition]:
    if isinstance(spec, FilterCondition):
        return spec
    if isinstance(spec, Mapping) and spec.get("operator"):
        return FilterCondition.model_validate(dict(spec))
    return None


def _match_condition(item_value: Any, condition: FilterCondition) -> bool:
    operator = condition.operator
    if operator == FilterOperator.eq:
        return _strict_equals(item_value, condition.value)
    if operator == FilterOperator.contains:
        if item_value is None:
            return False
        return str(condition.value).lower() in str(item_value).lower()
    if operator == FilterOperator.gte:
        return _safe_compare(item_value, condition.value, "gte")
    if operator == FilterOperator.lte:
        return _safe_compare(item_value, condition.value, "lte")
    if operator == FilterOperator.between:
        return (
            _safe_compare(item_value, condition.min, "gte")
            and _safe_compare(item_value, condition.max, "lte")
        )
    # operador desconocido: igualdad contra value
    return _strict_equals(item_value, condition.value)


def matches_filter(item_value: Any, spec: FilterSpec) -> bool:
    """
    Evalúa un filtro de campo contra el valor de un registro.

    Args:
        item_value: Valor del campo en el registro
        spec: Literal (igualdad), colección (pertenencia) o descriptor con operador

    Returns:
        True si el registro cumple el filtro
    """
    condition = _as_condition(spec)
    if condition is not None:
        return _match_condition(item_value, condition)
    if isinstance(spec, _COLLECTION_TYPES):
        return any(_strict_equals(item_value, candidate) for candidate in spec)
    return _strict_equals(item_value, spec)


def exclude_deleted(data: Iterable[Record]) -> list[Record]:
    """Descarta los registros marcados con is_deleted."""
    return [item for item in data if not item.get("is_deleted")]


def apply_search(
    data: Iterable[Record],
    q: Optional[str],
    search_fields: Sequence[str] = (),
) -> list[Record]:
    """
    Conserva los registros donde algún campo de búsqueda contiene ``q``.

    La comparación es por subcadena y sin distinguir mayúsculas.
    """
    data = list(data)
    if not q or not search_fields:
        return data

    query = q.lower()
    return [
        item for item in data
        if any(
            item.get(field) is not None and query in str(item.get(field)).lower()
            for field in search_fields
        )
    ]


def apply_field_filters(
    data: Iterable[Record],
    filters: Optional[Mapping[str, FilterSpec]],
) -> list[Record]:
    """Aplica los filtros por campo en conjunción (AND entre campos)."""
    filtered = list(data)
    if not filters:
        return filtered

    for field, spec in filters.items():
        if _is_empty_spec(spec):
            continue
        filtered = [item for item in filtered if matches_filter(item.get(field), spec)]
    return filtered


def apply_filters(
    data: Iterable[Record],
    params: ListParams,
    search_fields: Sequence[str] = (),
) -> list[Record]:
    """
    Soft delete, búsqueda y filtros por campo, en ese orden.

    Args:
        data: Snapshot completo del namespace
        params: Parámetros del listado
        search_fields: Campos sobre los que se busca ``q``

    Returns:
        Nueva lista con los registros que cumplen todos los criterios
    """
    filtered = exclude_deleted(data)
    filtered = apply_search(filtered, params.q, search_fields)
    return apply_field_filters(filtered, params.filters)


def _sort_key(value: Any) -> tuple:
    if value is None:
        return (3, 0)
    if isinstance(value, (bool, int, float, Decimal)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def apply_sorting(
    data: Sequence[Record],
    sort_by: Optional[str] = None,
    sort_dir: str = "asc",
) -> list[Record]:
    """
    Ordena de forma estable por un único campo.

    Sin ``sort_by`` conserva el orden recibido. Los empates mantienen su
    orden relativo en ambas direcciones. Con tipos mezclados el orden es
    números < cadenas < otros valores < ausentes/None.
    """
    if not sort_by:
        return list(data)

    return sorted(
        data,
        key=lambda item: _sort_key(item.get(sort_by)),
        reverse=sort_dir == "desc",
    )


def run_query(
    data: Iterable[Record],
    params: Optional[Union[ListParams, Mapping[str, Any]]] = None,
    search_fields: Sequence[str] = (),
) -> ListResult:
    """
    Ejecuta el pipeline completo: filtros, ordenamiento y paginación.

    Args:
        data: Snapshot completo del namespace
        params: ListParams o diccionario equivalente
        search_fields: Campos de búsqueda del namespace

    Returns:
        ListResult con la página pedida y el total filtrado
    """
    params = coerce_params(params)
    filtered = apply_filters(data, params, search_fields)
    ordered = apply_sorting(filtered, params.sort_by, params.sort_dir)
    return apply_pagination(ordered, params.page, params.page_size)


def coerce_params(params: Optional[Union[ListParams, Mapping[str, Any]]]) -> ListParams:
    """
    Acepta ListParams, un diccionario equivalente o None.

    Los valores None equivalen a omitir el parámetro.

    Raises:
        ValidationException: Si algún parámetro tiene un tipo no válido
    """
    if params is None:
        return ListParams()
    if isinstance(params, ListParams):
        return params
    try:
        return ListParams.model_validate(dict(params))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "params"
            errors.setdefault(field, error["msg"])
        raise ValidationException(message="Parámetros de listado no válidos", errors=errors)
