"""
Registro de servicios por namespace.

Todos los servicios comparten un repositorio y una estrategia de bloqueo
inyectados; no existe un almacenamiento global del proceso.
"""

from typing import Iterator, Optional
import logging

from services.base_service import EntityService
from services.delivery_order_service import create_delivery_order_service
from services.master_data_service import create_master_services
from services.commercial_service import create_commercial_services
from repositories.base_repository import NamespaceRepository
from core.exceptions import NotFoundException

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Colección de EntityService indexada por namespace."""

    def __init__(self, services: Optional[dict[str, EntityService]] = None):
        self._services: dict[str, EntityService] = dict(services or {})

    def register(self, service: EntityService) -> EntityService:
        if service.namespace in self._services:
            raise ValueError(f"Namespace ya registrado: {service.namespace}")
        self._services[service.namespace] = service
        return service

    def get(self, namespace: str) -> EntityService:
        """
        Obtiene el servicio de un namespace.

        Raises:
            NotFoundException: Si el namespace no está registrado
        """
        service = self._services.get(namespace)
        if service is None:
            raise NotFoundException(resource="Namespace", identifier=namespace)
        return service

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._services

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._services))

    def __len__(self) -> int:
        return len(self._services)


def build_registry(repository: NamespaceRepository, lock=None) -> ServiceRegistry:
    """
    Construye el registro con todos los servicios de dominio.

    Args:
        repository: Medio persistente compartido por todos los namespaces
        lock: Estrategia de bloqueo compartida

    Returns:
        ServiceRegistry con datos maestros, documentos comerciales y delivery orders
    """
    registry = ServiceRegistry(create_master_services(repository, lock=lock))
    for service in create_commercial_services(repository, lock=lock).values():
        registry.register(service)
    registry.register(create_delivery_order_service(repository, lock=lock))
    logger.info(f"Service registry built with {len(registry)} namespaces")
    return registry
