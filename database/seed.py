"""Carga idempotente de datos maestros de referencia."""
import logging

from services.registry import ServiceRegistry

logger = logging.getLogger(__name__)

SEED_USER = "system"

CATEGORIES = [
    {"name": "Natural Stone", "code": "NS", "description": "Natural stone products including granite, marble, etc."},
    {"name": "Ceramic Tiles", "code": "CT", "description": "Ceramic and porcelain tiles"},
    {"name": "Engineered Stone", "code": "ES", "description": "Quartz and engineered stone products"},
    {"name": "Accessories", "code": "ACC", "description": "Installation accessories and tools"},
]

CURRENCIES = [
    {"name": "Indonesian Rupiah", "code": "IDR", "symbol": "Rp", "is_base": True, "exchange_rate": 1},
    {"name": "US Dollar", "code": "USD", "symbol": "$", "is_base": False, "exchange_rate": 15800},
    {"name": "Euro", "code": "EUR", "symbol": "€", "is_base": False, "exchange_rate": 17200},
    {"name": "Chinese Yuan", "code": "CNY", "symbol": "¥", "is_base": False, "exchange_rate": 2200},
]

MATERIAL_TYPES = [
    {"name": "Granite", "code": "GRN", "description": "Natural granite stone"},
    {"name": "Marble", "code": "MRB", "description": "Natural marble stone"},
    {"name": "Quartz", "code": "QTZ", "description": "Engineered quartz stone"},
    {"name": "Porcelain", "code": "PRC", "description": "Porcelain ceramic tiles"},
    {"name": "Ceramic", "code": "CER", "description": "Standard ceramic tiles"},
    {"name": "Travertine", "code": "TRV", "description": "Natural travertine stone"},
]

FINISHING_TYPES = [
    {"name": "Polished", "code": "POL", "description": "High gloss polished finish"},
    {"name": "Honed", "code": "HON", "description": "Matte honed finish"},
    {"name": "Brushed", "code": "BRU", "description": "Textured brushed finish"},
    {"name": "Flamed", "code": "FLM", "description": "Rough flamed finish"},
]

ORIGINS = [
    {"name": "Indonesia", "code": "ID", "country": "Indonesia"},
    {"name": "Italy", "code": "IT", "country": "Italy", "region": "Carrara"},
    {"name": "India", "code": "IN", "country": "India"},
    {"name": "China", "code": "CN", "country": "China"},
]

CUSTOMER_TYPES = [
    {"name": "Retail", "code": "RTL", "discount_rate": 0, "payment_terms": "COD"},
    {"name": "Contractor", "code": "CTR", "discount_rate": 5, "payment_terms": "NET 30"},
    {"name": "Distributor", "code": "DST", "discount_rate": 10, "payment_terms": "NET 45"},
]

SEED_DATA = {
    "categories": CATEGORIES,
    "currencies": CURRENCIES,
    "material-types": MATERIAL_TYPES,
    "finishing-types": FINISHING_TYPES,
    "origins": ORIGINS,
    "customer-types": CUSTOMER_TYPES,
}


def seed_database(registry: ServiceRegistry) -> int:
    """Carga los datos maestros de referencia si la base está vacía.

    La presencia de alguna categoría viva indica que ya se cargaron.

    Args:
        registry: Registro de servicios sobre el que se crean los registros

    Returns:
        int: Número de registros creados (0 si ya estaba cargada)
    """
    existing = registry.get("categories").list({"page_size": 1})
    if existing.total > 0:
        logger.info("Database already seeded, skipping")
        return 0

    created = 0
    for namespace, rows in SEED_DATA.items():
        service = registry.get(namespace)
        for row in rows:
            service.create({**row, "is_active": True}, user_id=SEED_USER)
            created += 1
        logger.info(f"Seeded {len(rows)} {namespace}")

    return created
