"""
Repositorio de namespaces sobre una tabla SQL (una fila por namespace).
"""

from typing import Callable, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repositories.base_repository import NamespaceRepository
from database.models import NamespaceORM
from database.db import check_connection
from core.exceptions import StorageException

logger = logging.getLogger(__name__)


class SQLNamespaceRepository(NamespaceRepository):
    """Guarda cada snapshot como texto JSON en ``entity_namespaces``."""

    def __init__(self, session_factory: Callable[[], Session], key_prefix: str = "erp"):
        """
        Inicializa el repositorio SQL.

        Args:
            session_factory: Fábrica de sesiones SQLAlchemy (sessionmaker)
            key_prefix: Prefijo de las claves de almacenamiento
        """
        super().__init__(key_prefix)
        self.session_factory = session_factory

    def _read_raw(self, key: str) -> Optional[str]:
        session = self.session_factory()
        try:
            row = session.get(NamespaceORM, key)
            return row.payload if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error reading namespace {key}: {e}", exc_info=True)
            raise StorageException(f"Error al leer {key}")
        finally:
            session.close()

    def _write_raw(self, key: str, payload: str) -> None:
        session = self.session_factory()
        try:
            row = session.get(NamespaceORM, key)
            if row is None:
                session.add(NamespaceORM(storage_key=key, payload=payload))
            else:
                row.payload = payload
            session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error writing namespace {key}: {e}", exc_info=True)
            session.rollback()
            raise StorageException(f"Error al guardar {key}")
        finally:
            session.close()

    def health(self) -> bool:
        session = self.session_factory()
        try:
            return check_connection(session.get_bind())
        finally:
            session.close()
