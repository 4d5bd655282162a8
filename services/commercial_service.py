"""
Servicios de documentos comerciales: marketing, catálogo y compras.

Como los datos maestros, cada namespace es solo una definición (campos de
búsqueda y validador opcional) sobre EntityService.
"""

from typing import Any, Mapping
import logging

from services.base_service import EntityService, create_service
from services.master_data_service import MasterDefinition
from services.validation import ValidationResult, pydantic_validator
from repositories.base_repository import NamespaceRepository
from models.commercial import (
    PriceListRules,
    SalesOrderRules,
    ContractRules,
    ColdCallRules,
    MeetingMinutesRules,
    CommissionRuleRules,
    ItemRules,
    ProductRules,
    PurchaseRequestRules,
    PurchaseOrderRules,
    PurchaseInvoiceRules,
    SkuRules,
    ReceivedItemRules,
    ComplaintReturnRules,
)

logger = logging.getLogger(__name__)

FIXED_PER_UNIT = "FIXED_PER_UNIT"

validate_price_list = pydantic_validator(PriceListRules)
validate_sales_order = pydantic_validator(SalesOrderRules)
validate_contract = pydantic_validator(ContractRules)
validate_cold_call = pydantic_validator(ColdCallRules)
validate_meeting_minutes = pydantic_validator(MeetingMinutesRules)
validate_item = pydantic_validator(ItemRules)
validate_product = pydantic_validator(ProductRules)
validate_purchase_request = pydantic_validator(PurchaseRequestRules)
validate_purchase_order = pydantic_validator(PurchaseOrderRules)
validate_purchase_invoice = pydantic_validator(PurchaseInvoiceRules)
validate_sku = pydantic_validator(SkuRules)
validate_received_item = pydantic_validator(ReceivedItemRules)
validate_complaint_return = pydantic_validator(ComplaintReturnRules)

_validate_commission_fields = pydantic_validator(CommissionRuleRules)


def _positive(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def validate_commission_rule(data: Mapping[str, Any]) -> ValidationResult:
    """
    Valida una regla de comisión.

    ``FIXED_PER_UNIT`` exige ``fixed_amount`` > 0; cualquier otro cálculo
    (porcentajes) exige ``rate`` > 0.
    """
    errors = dict(_validate_commission_fields(dict(data)).errors or {})
    if data.get("calc") == FIXED_PER_UNIT:
        if not _positive(data.get("fixed_amount")):
            errors.setdefault("fixed_amount", "Fixed amount is required for fixed per unit calculation")
    elif not _positive(data.get("rate")):
        errors.setdefault("rate", "Rate is required for percentage calculations")
    return ValidationResult.from_errors(errors)


COMMERCIAL_DEFINITIONS: tuple[MasterDefinition, ...] = (
    # marketing
    MasterDefinition("marketing-settings", ("stagger_default_period",)),
    MasterDefinition("cold-calls", ("customer_id", "owner_id"), validate_cold_call),
    MasterDefinition("meeting-minutes", ("customer_id", "notes"), validate_meeting_minutes),
    MasterDefinition("sales-orders", ("code", "customer_id"), validate_sales_order),
    MasterDefinition("contracts", ("code", "scope"), validate_contract),
    MasterDefinition("price-lists", ("name",), validate_price_list),
    MasterDefinition("commission-rules", ("name",), validate_commission_rule),
    MasterDefinition("commission-entries", ("payable_to",)),
    MasterDefinition("quotation-price-logs", ("customer_id", "product_id")),
    # catálogo
    MasterDefinition("items", ("name", "code"), validate_item),
    MasterDefinition("products", ("sku", "name"), validate_product),
    MasterDefinition("product-price-history", ("product_id",)),
    MasterDefinition("product-images", ("product_id", "file_name")),
    # compras
    MasterDefinition("purchase-requests", ("request_number", "description", "requested_by"), validate_purchase_request),
    MasterDefinition("purchase-orders", ("order_number", "supplier_name", "notes"), validate_purchase_order),
    MasterDefinition("purchase-invoices", ("invoice_number", "supplier_name", "payment_reference"), validate_purchase_invoice),
    MasterDefinition("skus", ("sku_code", "name", "product_name", "description"), validate_sku),
    MasterDefinition("received-items", ("receipt_number", "purchase_order_number", "received_by"), validate_received_item),
    MasterDefinition("complaint-returns", ("complaint_number", "reason", "description", "reported_by"), validate_complaint_return),
)


def create_commercial_services(
    repository: NamespaceRepository,
    lock=None,
) -> dict[str, EntityService]:
    """
    Crea los servicios de marketing, catálogo y compras.

    Args:
        repository: Medio persistente compartido
        lock: Estrategia de bloqueo compartida

    Returns:
        Diccionario namespace -> EntityService
    """
    services = {}
    for definition in COMMERCIAL_DEFINITIONS:
        services[definition.namespace] = create_service(
            definition.namespace,
            definition.search_fields,
            definition.validate,
            repository=repository,
            lock=lock,
        )
    logger.debug(f"{len(services)} commercial services created")
    return services
