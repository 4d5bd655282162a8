"""
Frontera de validación del almacén.

Un validador es cualquier callable ``(registro) -> ValidationResult``. El
servicio solo necesita el resultado booleano y, opcionalmente, un mapa de
mensajes por campo; las reglas concretas viven en cada servicio de dominio.
"""

from typing import Any, Callable, Mapping, Optional, Type
from pydantic import BaseModel, Field, ValidationError


class ValidationResult(BaseModel):
    """Resultado de validar un registro candidato."""
    success: bool = Field(..., description="True si el registro es válido")
    errors: Optional[dict[str, str]] = Field(None, description="Mensajes por campo")

    @classmethod
    def from_errors(cls, errors: Mapping[str, str]) -> "ValidationResult":
        """Construye el resultado a partir de un mapa (vacío = éxito)."""
        errors = dict(errors)
        return cls(success=not errors, errors=errors or None)


Validator = Callable[[dict[str, Any]], Any]


def normalize_result(outcome: Any) -> ValidationResult:
    """
    Normaliza la salida de un validador.

    Acepta ValidationResult, un diccionario ``{success, errors}`` o una
    tupla ``(success, errors)``.
    """
    if isinstance(outcome, ValidationResult):
        return outcome
    if isinstance(outcome, Mapping):
        return ValidationResult(success=bool(outcome.get("success")), errors=outcome.get("errors"))
    if isinstance(outcome, tuple) and len(outcome) == 2:
        success, errors = outcome
        return ValidationResult(success=bool(success), errors=errors)
    raise TypeError(f"Resultado de validación no soportado: {type(outcome).__name__}")


def _loc_to_field(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def pydantic_validator(model_cls: Type[BaseModel]) -> Validator:
    """
    Construye un validador a partir de un modelo pydantic.

    Los errores de pydantic se convierten a ``{"campo.anidado": "mensaje"}``;
    si un campo tiene varios errores se conserva el primero.

    Args:
        model_cls: Modelo con las reglas del registro

    Returns:
        Validador compatible con EntityService
    """
    def validate(data: dict[str, Any]) -> ValidationResult:
        try:
            model_cls.model_validate(data)
        except ValidationError as e:
            errors: dict[str, str] = {}
            for error in e.errors():
                errors.setdefault(_loc_to_field(error["loc"]), error["msg"])
            return ValidationResult.from_errors(errors)
        return ValidationResult(success=True)

    validate.__name__ = f"validate_{model_cls.__name__}"
    return validate


def required_fields_validator(*fields: str) -> Validator:
    """Validador mínimo: cada campo debe existir y no estar en blanco."""
    def validate(data: dict[str, Any]) -> ValidationResult:
        errors = {}
        for field in fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field] = f"{field} es obligatorio"
        return ValidationResult.from_errors(errors)

    return validate


