from .delivery_orders import EstadoDeliveryOrder
from .masters import (
    MasterRules,
    CategoryRules,
    CurrencyRules,
    SupplierRules,
    CustomerRules,
)
from .commercial import (
    PriceListRules,
    SalesOrderRules,
    ContractRules,
    CommissionRuleRules,
    ItemRules,
    ProductRules,
)
from .common import (
    ENVELOPE_FIELDS,
    BaseEntity,
    MutationResult,
    DeleteResult,
    ImportResult,
    ErrorResponse,
    HealthCheckResponse,
    create_error_response,
    create_list_response,
)

__all__ = [
    # Delivery orders
    "EstadoDeliveryOrder",
    # Datos maestros
    "MasterRules",
    "CategoryRules", "CurrencyRules", "SupplierRules", "CustomerRules",
    # Documentos comerciales
    "PriceListRules", "SalesOrderRules", "ContractRules", "CommissionRuleRules",
    "ItemRules", "ProductRules",
    # Common
    "ENVELOPE_FIELDS", "BaseEntity", "MutationResult", "DeleteResult", "ImportResult",
    "ErrorResponse", "HealthCheckResponse",
    "create_error_response", "create_list_response",
]
