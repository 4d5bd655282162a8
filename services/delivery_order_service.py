"""
Service for DeliveryOrder business logic.

Binds the ``delivery-orders`` namespace to the generic entity store and adds
the delivery order rules: header/line validation, number generation and
header totals.
"""

from typing import Any, Mapping, Optional
import logging
import secrets

from services.base_service import EntityService
from services.validation import ValidationResult
from repositories.base_repository import NamespaceRepository
from models.common import MutationResult
from models.delivery_orders import EstadoDeliveryOrder, LINE_QUANTITY_FIELD, LINE_AMOUNT_FIELD
from utils.datetime_utils import get_local_now

logger = logging.getLogger(__name__)

NAMESPACE = "delivery-orders"
SEARCH_FIELDS = ("delivery_order_number", "customer_name", "notes")


def generate_delivery_order_number() -> str:
    """
    Generate a delivery order number ``DO/{YYYY}/{MM}/{NNNN}``.

    The sequence part is random (0001-9999), it is not a counter.
    """
    now = get_local_now()
    sequence = secrets.randbelow(9999) + 1
    return f"DO/{now.year}/{now.month:02d}/{sequence:04d}"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_delivery_order(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a delivery order candidate.

    Errors for line fields are keyed ``lines.{index}.{field}``; when several
    quantity rules fail for a line, the last one wins.

    Args:
        data: Candidate record (create payload or merged update)

    Returns:
        ValidationResult with field errors
    """
    errors: dict[str, str] = {}

    if not data.get("expedition_id"):
        errors["expedition_id"] = "Expedition is required"
    if not data.get("sales_order_id"):
        errors["sales_order_id"] = "Sales Order is required"
    if not data.get("delivery_date"):
        errors["delivery_date"] = "Delivery date is required"

    status = data.get("status")
    if status is not None and status not in [estado.value for estado in EstadoDeliveryOrder]:
        errors["status"] = f"Invalid status: {status}"

    lines = data.get("lines") or []
    if not isinstance(lines, list) or len(lines) == 0:
        errors["lines"] = "At least one line item is required"
        lines = []

    for index, line in enumerate(lines):
        if not isinstance(line, Mapping):
            errors[f"lines.{index}"] = "Invalid line item"
            continue

        prefix = f"lines.{index}"
        if not line.get("product_id"):
            errors[f"{prefix}.product_id"] = "Product is required"

        quantity = _number(line.get(LINE_QUANTITY_FIELD))
        if quantity is None or quantity <= 0:
            errors[f"{prefix}.{LINE_QUANTITY_FIELD}"] = "Quantity to deliver must be greater than 0"

        stock = _number(line.get("stock_available"))
        if quantity is not None and stock is not None and quantity > stock:
            errors[f"{prefix}.{LINE_QUANTITY_FIELD}"] = "Quantity to deliver cannot exceed available stock"

        ordered = _number(line.get("ordered_quantity"))
        delivered = _number(line.get("already_delivered_quantity")) or 0.0
        if quantity is not None and ordered is not None and quantity > ordered - delivered:
            errors[f"{prefix}.{LINE_QUANTITY_FIELD}"] = "Quantity to deliver cannot exceed remaining balance"

        if not line.get("warehouse_id"):
            errors[f"{prefix}.warehouse_id"] = "Warehouse is required"

    return ValidationResult.from_errors(errors)


def calculate_totals(lines: list) -> dict[str, float]:
    """Header totals from the line items."""
    total_quantity = 0.0
    total_amount = 0.0
    for line in lines or []:
        if isinstance(line, Mapping):
            total_quantity += _number(line.get(LINE_QUANTITY_FIELD)) or 0.0
            total_amount += _number(line.get(LINE_AMOUNT_FIELD)) or 0.0
    return {"total_quantity": total_quantity, "total_amount": total_amount}


class DeliveryOrderService(EntityService):
    """Service for managing delivery orders."""

    def __init__(self, repository: NamespaceRepository, lock=None):
        super().__init__(
            namespace=NAMESPACE,
            repository=repository,
            search_fields=SEARCH_FIELDS,
            validate=validate_delivery_order,
            lock=lock,
            template_fields=(
                "delivery_order_number",
                "delivery_date",
                "expedition_id",
                "sales_order_id",
                "customer_name",
                "notes",
            ),
        )

    def create(self, data: Mapping[str, Any], user_id: Optional[str] = None) -> MutationResult:
        """Create a delivery order, assigning number, status and totals when missing."""
        payload = dict(data)
        if not payload.get("delivery_order_number"):
            payload["delivery_order_number"] = generate_delivery_order_number()
        payload.setdefault("status", EstadoDeliveryOrder.draft.value)
        payload.setdefault("is_voidable", True)
        if isinstance(payload.get("lines"), list):
            payload.update(calculate_totals(payload["lines"]))

        result = super().create(payload, user_id=user_id)
        logger.info(f"Delivery order {result.data['delivery_order_number']} registered")
        return result

    def update(self, id: str, data: Mapping[str, Any], user_id: Optional[str] = None) -> MutationResult:
        """Update a delivery order; totals follow the lines when they change."""
        partial = dict(data)
        if isinstance(partial.get("lines"), list):
            partial.update(calculate_totals(partial["lines"]))
        return super().update(id, partial, user_id=user_id)


def create_delivery_order_service(repository: NamespaceRepository, lock=None) -> DeliveryOrderService:
    """Create the delivery order service on the given repository."""
    return DeliveryOrderService(repository, lock=lock)
