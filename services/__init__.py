"""
Capa de servicio del almacén de entidades.
Este paquete contiene el servicio CRUD genérico, la frontera de validación
y los servicios de dominio (datos maestros, documentos comerciales y
delivery orders).
"""

from .base_service import EntityService, create_service
from .validation import ValidationResult, pydantic_validator, required_fields_validator
from .delivery_order_service import DeliveryOrderService, create_delivery_order_service
from .master_data_service import MASTER_DEFINITIONS, create_master_services
from .commercial_service import COMMERCIAL_DEFINITIONS, create_commercial_services
from .registry import ServiceRegistry, build_registry

__all__ = [
    "EntityService",
    "create_service",
    "ValidationResult",
    "pydantic_validator",
    "required_fields_validator",
    "DeliveryOrderService",
    "create_delivery_order_service",
    "MASTER_DEFINITIONS",
    "create_master_services",
    "COMMERCIAL_DEFINITIONS",
    "create_commercial_services",
    "ServiceRegistry",
    "build_registry",
]
