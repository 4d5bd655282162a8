"""
Tests for master data services, the service registry and the seed loader.
"""

import pytest

from core.exceptions import NotFoundException, ValidationException
from database.seed import SEED_DATA, seed_database
from repositories import NamespaceMutex, NullLock, build_lock
from services.base_service import create_service
from services.master_data_service import (
    MASTER_DEFINITIONS,
    create_master_services,
    validate_category,
    validate_currency,
    validate_customer,
    validate_supplier,
)
from services.registry import ServiceRegistry, build_registry


class TestMasterValidators:
    """Tests for master data rules."""

    def test_validate_category(self):
        """Test a complete category passes validation."""
        assert validate_category({"name": "Natural Stone", "code": "NS"}).success is True

    def test_validate_category_blank_code(self):
        """Test a blank category code is rejected."""
        result = validate_category({"name": "Natural Stone", "code": "  "})

        assert result.success is False
        assert set(result.errors) == {"code"}

    def test_validate_currency_requires_symbol(self):
        """Test a currency needs a symbol."""
        result = validate_currency({"name": "Euro", "code": "EUR"})
        assert set(result.errors) == {"symbol"}

    def test_validate_supplier_invalid_email(self):
        """Test a malformed supplier email is rejected."""
        result = validate_supplier({"name": "PT Supplier", "code": "SUP", "email": "not-an-email"})
        assert "email" in result.errors

    def test_validate_supplier_optional_email(self):
        """Test an empty supplier email is allowed."""
        assert validate_supplier({"name": "PT Supplier", "code": "SUP", "email": ""}).success is True

    def test_validate_customer_requires_type(self):
        """Test a customer needs a customer type."""
        result = validate_customer({"name": "PT Customer", "code": "CUS", "email": "a@b.co"})
        assert set(result.errors) == {"type_id"}


class TestMasterServices:
    """Tests for the master data service bindings."""

    def test_create_master_services(self, memory_repository):
        """Test one service per master definition."""
        services = create_master_services(memory_repository)

        assert len(services) == len(MASTER_DEFINITIONS) == 21
        assert services["vehicles"].search_fields == ("license_plate", "brand", "model")

    def test_create_warehouse_independent_namespaces(self, memory_repository):
        """Test creating a warehouse leaves vendors empty."""
        services = create_master_services(memory_repository)
        services["warehouses"].create({"name": "Main", "code": "WH1"})

        assert services["warehouses"].list().total == 1
        assert services["vendors"].list().total == 0

    def test_create_customer_invalid(self, memory_repository):
        """Test an incomplete customer is rejected."""
        services = create_master_services(memory_repository)

        with pytest.raises(ValidationException) as exc_info:
            services["customers"].create({"name": "PT Customer"})
        assert set(exc_info.value.errors) == {"code", "type_id"}

    def test_search_suppliers_by_contact(self, memory_repository):
        """Test searching suppliers by contact person."""
        services = create_master_services(memory_repository)
        services["suppliers"].create({"name": "PT A", "code": "A", "contact_person": "Budi"})
        services["suppliers"].create({"name": "PT B", "code": "B", "contact_person": "Sari"})

        assert [item["code"] for item in services["suppliers"].list({"q": "budi"}).data] == ["A"]


class TestServiceRegistry:
    """Tests for the namespace registry."""

    def test_build_registry(self, registry: ServiceRegistry):
        """Test the registry holds every namespace in order."""
        assert len(registry) == 41
        for namespace in ("delivery-orders", "categories", "price-lists", "purchase-orders", "skus"):
            assert namespace in registry
        assert list(registry) == sorted(list(registry))

    def test_get_unknown_namespace(self, registry: ServiceRegistry):
        """Test an unknown namespace raises NotFoundException."""
        with pytest.raises(NotFoundException) as exc_info:
            registry.get("unicorns")
        assert exc_info.value.identifier == "unicorns"

    def test_register_duplicate_namespace(self, registry: ServiceRegistry, memory_repository):
        """Test registering a namespace twice is rejected."""
        with pytest.raises(ValueError):
            registry.register(create_service("categories", repository=memory_repository))

    def test_build_registry_shared_lock(self, memory_repository):
        """Test every service shares the given lock."""
        lock = NamespaceMutex()
        registry = build_registry(memory_repository, lock=lock)

        assert registry.get("categories").lock is lock
        assert registry.get("delivery-orders").lock is lock


class TestBuildLock:
    """Tests for lock strategy selection."""

    def test_build_lock_strategies(self):
        """Test the none and mutex strategies."""
        assert isinstance(build_lock("none"), NullLock)
        assert isinstance(build_lock("mutex"), NamespaceMutex)

    def test_build_lock_unknown_strategy(self):
        """Test an unknown strategy raises ValueError."""
        with pytest.raises(ValueError):
            build_lock("redis")


class TestSeedDatabase:
    """Tests for the reference data loader."""

    def test_seed_currencies(self, registry: ServiceRegistry):
        """Test seeding loads the reference currencies."""
        created = seed_database(registry)

        assert created == sum(len(rows) for rows in SEED_DATA.values())
        currencies = registry.get("currencies").list({"sort_by": "code"}).data
        assert [item["code"] for item in currencies] == ["CNY", "EUR", "IDR", "USD"]
        assert all(item["created_by"] == "system" for item in currencies)
        assert all(item["is_active"] is True for item in currencies)

    def test_seed_categories_idempotent(self, registry: ServiceRegistry):
        """Test a second seed creates nothing."""
        seed_database(registry)

        assert seed_database(registry) == 0
        assert registry.get("categories").list().total == 4
