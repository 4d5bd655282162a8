"""
Repositorio base de namespaces.

Un namespace es la colección completa (snapshot) de registros de un tipo de
entidad. Los repositorios solo saben leer y reemplazar snapshots enteros;
no contienen lógica de consulta ni de negocio.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
import json
import logging

from core.exceptions import StorageException

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class NamespaceRepository(ABC):
    """
    Contrato del medio persistente: ``load`` y ``save`` de snapshots.

    - ``load`` de un namespace inexistente devuelve [] y nunca falla por
      contenido corrupto: se registra el error y se devuelve [] (o solo
      los registros válidos si el arreglo mezcla elementos no válidos).
    - ``save`` reemplaza el snapshot completo de forma atómica; si el medio
      falla lanza StorageException.

    Las subclases implementan ``_read_raw`` y ``_write_raw`` sobre texto JSON.
    """

    def __init__(self, key_prefix: str = "erp"):
        """
        Inicializa el repositorio.

        Args:
            key_prefix: Prefijo de las claves de almacenamiento
        """
        self.key_prefix = key_prefix

    def storage_key(self, namespace: str) -> str:
        """Clave física de un namespace: ``{prefijo}.{namespace}``."""
        return f"{self.key_prefix}.{namespace}"

    @abstractmethod
    def _read_raw(self, key: str) -> Optional[str]:
        """Texto persistido bajo la clave, o None si no existe."""

    @abstractmethod
    def _write_raw(self, key: str, payload: str) -> None:
        """Reemplaza atómicamente el texto persistido bajo la clave."""

    def load(self, namespace: str) -> list[Record]:
        """
        Carga el snapshot completo de un namespace.

        Args:
            namespace: Nombre lógico de la entidad

        Returns:
            Lista de registros en orden de inserción ([] si no existe o está corrupto)
        """
        key = self.storage_key(namespace)
        raw = self._read_raw(key)
        if raw is None:
            return []
        return self._decode(raw, key)

    def save(self, namespace: str, records: list[Record]) -> None:
        """
        Persiste el snapshot completo de un namespace.

        Args:
            namespace: Nombre lógico de la entidad
            records: Colección completa a guardar

        Raises:
            StorageException: Si no se puede serializar o escribir
        """
        key = self.storage_key(namespace)
        payload = self._encode(records, key)
        self._write_raw(key, payload)
        logger.debug(f"Saved {len(records)} records to {key}")

    def normalize(self, namespace: str, record: Record) -> Record:
        """
        Registro tal como quedará persistido (fechas, decimales, etc. como texto).

        Raises:
            StorageException: Si el registro no se puede serializar
        """
        return json.loads(self._encode([record], self.storage_key(namespace)))[0]

    def _encode(self, records: list[Record], key: str) -> str:
        try:
            return json.dumps(list(records), default=str, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Error serializing {key}: {e}", exc_info=True)
            raise StorageException(f"Error al serializar {key}")

    def _decode(self, raw: str, key: str) -> list[Record]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"Malformed content in {key}, treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Content in {key} is not a list of records, treating as empty")
            return []

        records = [item for item in data if isinstance(item, dict)]
        dropped = len(data) - len(records)
        if dropped:
            logger.error(f"Dropped {dropped} malformed entries from {key}, kept {len(records)} records")
        return records

    def health(self) -> bool:
        """Indica si el medio está disponible."""
        return True
