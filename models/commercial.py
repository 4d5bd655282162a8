"""
Reglas de validación de los documentos comerciales.

Marketing (listas de precios, órdenes de venta, contratos...), catálogo de
artículos/productos y compras. Igual que en ``models.masters`` aceptan campos
extra: el candidato incluye el sobre y campos opcionales.
"""
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.masters import NonBlankStr

PositiveNumber = Annotated[float, Field(gt=0)]
NonNegativeNumber = Annotated[float, Field(ge=0)]
NonEmptyList = Annotated[list[Any], Field(min_length=1)]


class _Rules(BaseModel):
    model_config = ConfigDict(extra="allow")


# ==================== Marketing ====================

class PriceListRules(_Rules):
    """Lista de precios: nombre, vigencia y al menos un precio."""
    name: NonBlankStr
    effective_from: NonBlankStr
    items: NonEmptyList


class SalesOrderRules(_Rules):
    code: NonBlankStr
    customer_id: NonBlankStr
    lines: NonEmptyList
    top: PositiveNumber = Field(..., description="Términos de pago en días")


class ContractValidity(_Rules):
    start_date: NonBlankStr
    end_date: NonBlankStr


class ContractRules(_Rules):
    code: NonBlankStr
    scope: NonBlankStr
    parties: NonEmptyList
    validity: ContractValidity


class ColdCallRules(_Rules):
    customer_id: NonBlankStr
    owner_id: NonBlankStr
    scheduled_at: NonBlankStr
    status: NonBlankStr


class MeetingMinutesRules(_Rules):
    customer_id: NonBlankStr
    notes: NonBlankStr
    attendees: NonEmptyList


class CommissionRuleRules(_Rules):
    """Campos base; la exigencia de ``rate``/``fixed_amount`` depende de ``calc``."""
    name: NonBlankStr
    applies_to: NonBlankStr
    calc: NonBlankStr
    trigger: NonBlankStr
    rate: Optional[float] = None
    fixed_amount: Optional[float] = None


# ==================== Artículos y productos ====================

class ItemRules(_Rules):
    name: NonBlankStr
    code: NonBlankStr
    category_id: NonBlankStr
    material_type_id: NonBlankStr


class PriceOriginal(_Rules):
    amount: PositiveNumber
    currency: NonBlankStr


class Dimensions(_Rules):
    length: Optional[PositiveNumber] = None
    width: Optional[PositiveNumber] = None
    height: Optional[PositiveNumber] = None


class ProductRules(_Rules):
    item_id: NonBlankStr
    sku: NonBlankStr
    name: NonBlankStr
    category_id: NonBlankStr
    price_original: Optional[PriceOriginal] = None
    dimensions: Optional[Dimensions] = None


# ==================== Compras ====================

class PurchaseRequestRules(_Rules):
    request_number: NonBlankStr
    quantity: PositiveNumber
    product_id: NonBlankStr
    requested_by: NonBlankStr
    department: NonBlankStr
    expected_date: NonBlankStr


class PurchaseOrderRules(_Rules):
    order_number: NonBlankStr
    purchase_request_id: NonBlankStr
    supplier_id: NonBlankStr
    order_date: NonBlankStr
    expected_delivery_date: NonBlankStr
    line_items: NonEmptyList


class PurchaseInvoiceRules(_Rules):
    invoice_number: NonBlankStr
    purchase_order_id: NonBlankStr
    amount: PositiveNumber
    invoice_date: NonBlankStr
    due_date: NonBlankStr


class SkuRules(_Rules):
    sku_code: NonBlankStr
    product_id: NonBlankStr
    name: NonBlankStr
    cost_price: NonNegativeNumber
    profit_margin: NonNegativeNumber


class ReceivedItemRules(_Rules):
    receipt_number: NonBlankStr
    purchase_order_id: NonBlankStr
    received_date: NonBlankStr
    received_by: NonBlankStr
    warehouse_id: NonBlankStr


class ComplaintReturnRules(_Rules):
    complaint_number: NonBlankStr
    type: NonBlankStr
    reason: NonBlankStr
    description: NonBlankStr
    reported_by: NonBlankStr
