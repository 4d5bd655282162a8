"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import pytest
import os
from typing import Generator, Dict, Any, List
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Configurar para usar almacenamiento en memoria para tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_ON_STARTUP"] = "false"

from main import app
from database.db import create_tables
from dependencies import get_registry
from repositories import (
    SQLNamespaceRepository,
    FileNamespaceRepository,
    MemoryNamespaceRepository,
)
from services.base_service import EntityService, create_service
from services.registry import ServiceRegistry, build_registry
from services.validation import required_fields_validator


# ==================== Clock Fixtures ====================

class SteppingClock:
    """Reloj determinista: cada lectura avanza un segundo."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture(autouse=True)
def clock(monkeypatch) -> SteppingClock:
    """Replace the store clock so timestamps are distinct and predictable."""
    stepping = SteppingClock(datetime(2024, 1, 15, 9, 0, 0, tzinfo=ZoneInfo("Asia/Jakarta")))
    monkeypatch.setattr("core.utils.get_local_now", stepping)
    return stepping


# ==================== Storage Fixtures ====================

@pytest.fixture
def memory_repository() -> MemoryNamespaceRepository:
    """In-memory namespace repository."""
    return MemoryNamespaceRepository(key_prefix="test")


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(db_engine) -> SQLNamespaceRepository:
    """SQL namespace repository over the in-memory engine."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine
    )
    return SQLNamespaceRepository(TestingSessionLocal, key_prefix="test")


@pytest.fixture
def file_repository(tmp_path) -> FileNamespaceRepository:
    """JSON file namespace repository on a temporary directory."""
    return FileNamespaceRepository(tmp_path / "store", key_prefix="test", fsync_writes=False)


@pytest.fixture(params=["memory", "sql", "file"])
def any_repository(request):
    """Each repository implementation in turn."""
    return request.getfixturevalue(f"{request.param}_repository")


# ==================== Service Fixtures ====================

@pytest.fixture
def product_service(memory_repository: MemoryNamespaceRepository) -> EntityService:
    """Generic service with a required ``name`` field."""
    return create_service(
        "products",
        ("name", "code"),
        required_fields_validator("name"),
        repository=memory_repository,
    )


@pytest.fixture
def plain_service(memory_repository: MemoryNamespaceRepository) -> EntityService:
    """Generic service without validation."""
    return create_service("items", ("name",), repository=memory_repository)


@pytest.fixture
def registry(memory_repository: MemoryNamespaceRepository) -> ServiceRegistry:
    """Registry with every domain service on the in-memory repository."""
    return build_registry(memory_repository)


@pytest.fixture(scope="function")
def client(registry: ServiceRegistry) -> Generator[TestClient, None, None]:
    """Create a test client with the registry override."""
    app.dependency_overrides[get_registry] = lambda: registry

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Data Fixtures ====================

@pytest.fixture
def qty_records() -> List[Dict[str, Any]]:
    """Three records with a tie on ``qty``."""
    return [
        {"name": "A", "qty": 5},
        {"name": "B", "qty": 1},
        {"name": "C", "qty": 1},
    ]


@pytest.fixture
def delivery_order_data() -> Dict[str, Any]:
    """Sample valid delivery order."""
    return {
        "delivery_date": "2024-01-20",
        "expedition_id": "exp-1",
        "sales_order_id": "so-1",
        "customer_name": "PT Batu Alam",
        "notes": "Deliver before noon",
        "lines": [
            {
                "product_id": "prod-1",
                "warehouse_id": "wh-1",
                "ordered_quantity": 10,
                "already_delivered_quantity": 2,
                "stock_available": 20,
                "quantity_to_deliver": 5,
                "total_amount": 500000,
            },
            {
                "product_id": "prod-2",
                "warehouse_id": "wh-1",
                "ordered_quantity": 4,
                "stock_available": 4,
                "quantity_to_deliver": 4,
                "total_amount": 120000,
            },
        ],
    }


# ==================== Utility Functions ====================

def assert_datetime_format(dt_string: str) -> bool:
    """Assert that a string is a valid datetime in ISO format."""
    try:
        datetime.fromisoformat(dt_string.replace('Z', '+00:00'))
        return True
    except (ValueError, AttributeError):
        return False
