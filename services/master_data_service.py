"""
Servicios de datos maestros.

Cada tipo maestro es solo un namespace, sus campos de búsqueda y, en
algunos casos, reglas de validación; toda la lógica vive en EntityService.
"""

from typing import NamedTuple, Optional, Sequence
import logging

from services.base_service import EntityService, create_service
from services.validation import Validator, pydantic_validator
from repositories.base_repository import NamespaceRepository
from models.masters import CategoryRules, CurrencyRules, SupplierRules, CustomerRules

logger = logging.getLogger(__name__)


class MasterDefinition(NamedTuple):
    namespace: str
    search_fields: Sequence[str]
    validate: Optional[Validator] = None


validate_category = pydantic_validator(CategoryRules)
validate_currency = pydantic_validator(CurrencyRules)
validate_supplier = pydantic_validator(SupplierRules)
validate_customer = pydantic_validator(CustomerRules)


MASTER_DEFINITIONS: tuple[MasterDefinition, ...] = (
    MasterDefinition("categories", ("name", "code"), validate_category),
    MasterDefinition("finishing-types", ("name", "code")),
    MasterDefinition("material-types", ("name", "code")),
    MasterDefinition("sizes", ("name", "code")),
    MasterDefinition("origins", ("name", "code", "country")),
    MasterDefinition("currencies", ("name", "code"), validate_currency),
    MasterDefinition("promotions", ("name", "code")),
    MasterDefinition("suppliers", ("name", "code", "contact_person"), validate_supplier),
    MasterDefinition("warehouses", ("name", "code")),
    MasterDefinition("vehicles", ("license_plate", "brand", "model")),
    MasterDefinition("expeditions", ("name", "code")),
    MasterDefinition("armadas", ("name", "code")),
    MasterDefinition("bank-accounts", ("bank_name", "account_number", "account_name")),
    MasterDefinition("vendors", ("name", "code")),
    MasterDefinition("accounts", ("name", "code")),
    MasterDefinition("account-categories", ("name", "code")),
    MasterDefinition("sub-account-categories", ("name", "code")),
    MasterDefinition("departments", ("name", "code")),
    MasterDefinition("customer-types", ("name", "code")),
    MasterDefinition("projects", ("name", "code")),
    MasterDefinition("customers", ("name", "code", "contact_person"), validate_customer),
)


def create_master_services(
    repository: NamespaceRepository,
    lock=None,
) -> dict[str, EntityService]:
    """
    Crea los servicios de todos los tipos maestros.

    Args:
        repository: Medio persistente compartido
        lock: Estrategia de bloqueo compartida

    Returns:
        Diccionario namespace -> EntityService
    """
    services = {}
    for definition in MASTER_DEFINITIONS:
        services[definition.namespace] = create_service(
            definition.namespace,
            definition.search_fields,
            definition.validate,
            repository=repository,
            lock=lock,
        )
    logger.debug(f"{len(services)} master data services created")
    return services
