"""
Modelos de datos maestros.

Las reglas (``*Rules``) se usan como validadores de los servicios; aceptan
campos extra porque el candidato incluye el sobre y campos opcionales.
"""
import re
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class MasterRules(BaseModel):
    """Reglas comunes: nombre y código obligatorios."""
    model_config = ConfigDict(extra="allow")

    name: NonBlankStr
    code: NonBlankStr


class CategoryRules(MasterRules):
    parent_id: Optional[str] = None


class CurrencyRules(MasterRules):
    symbol: NonBlankStr
    exchange_rate: Optional[float] = None


class _ContactRules(MasterRules):
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """El email es opcional, pero si viene debe tener formato válido."""
        if v and not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v


class SupplierRules(_ContactRules):
    pass


class CustomerRules(_ContactRules):
    type_id: NonBlankStr
