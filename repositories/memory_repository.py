"""
Repositorio de namespaces en memoria del proceso (tests y desarrollo).
"""

from typing import Optional

from repositories.base_repository import NamespaceRepository


class MemoryNamespaceRepository(NamespaceRepository):
    """
    Guarda el texto JSON de cada snapshot en un diccionario.

    Al guardar texto serializado, cada ``load`` devuelve una copia
    independiente, igual que un medio persistente real.
    """

    def __init__(self, key_prefix: str = "erp"):
        super().__init__(key_prefix)
        self._store: dict[str, str] = {}

    def _read_raw(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def _write_raw(self, key: str, payload: str) -> None:
        self._store[key] = payload

    def put_raw(self, namespace: str, payload: str) -> None:
        """Escribe texto arbitrario bajo un namespace (simula contenido corrupto)."""
        self._store[self.storage_key(namespace)] = payload

    def clear(self) -> None:
        self._store.clear()
