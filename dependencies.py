"""
Dependency injection for repositories and services.

This module provides FastAPI dependencies for injecting the namespace
repository, the lock strategy and the entity services into route handlers.
Tests override ``get_registry`` (or ``get_repository``) with
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from config import settings
from repositories import (
    NamespaceRepository,
    SQLNamespaceRepository,
    FileNamespaceRepository,
    MemoryNamespaceRepository,
    build_lock,
)
from services.base_service import EntityService
from services.registry import ServiceRegistry, build_registry


# ==================== Repository Dependencies ====================

@lru_cache
def get_repository() -> NamespaceRepository:
    """
    Get the configured NamespaceRepository instance.

    Returns:
        Repository for ``settings.storage_backend`` (sql, file or memory)
    """
    backend = settings.storage_backend
    if backend == "sql":
        from database.db import SessionLocal
        return SQLNamespaceRepository(SessionLocal, key_prefix=settings.storage_key_prefix)
    if backend == "file":
        return FileNamespaceRepository(settings.storage_dir, key_prefix=settings.storage_key_prefix)
    return MemoryNamespaceRepository(key_prefix=settings.storage_key_prefix)


@lru_cache
def get_lock():
    """Get the configured lock strategy (shared by every service)."""
    return build_lock(settings.lock_strategy)


# ==================== Service Dependencies ====================

@lru_cache
def get_registry() -> ServiceRegistry:
    """
    Get the ServiceRegistry with every domain service.

    Returns:
        ServiceRegistry bound to the configured repository and lock
    """
    return build_registry(get_repository(), lock=get_lock())


def get_entity_service(
    namespace: str,
    registry: ServiceRegistry = Depends(get_registry),
) -> EntityService:
    """
    Resolve the EntityService for the ``namespace`` path parameter.

    Raises:
        NotFoundException: If the namespace is not registered
    """
    return registry.get(namespace)


def get_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    """Actor id from the optional ``X-User-Id`` header (audit fields only)."""
    return x_user_id or None
