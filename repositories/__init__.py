"""
Capa de repositorio para el acceso al medio persistente.
Este paquete contiene los repositorios de namespaces (SQL, archivos JSON y
memoria) y las estrategias de bloqueo. Los repositorios leen y reemplazan
snapshots completos y no deben contener lógica de negocio.

"""

from .base_repository import NamespaceRepository
from .sql_repository import SQLNamespaceRepository
from .file_repository import FileNamespaceRepository
from .memory_repository import MemoryNamespaceRepository
from .locking import NullLock, NamespaceMutex, build_lock

__all__ = [
    "NamespaceRepository",
    "SQLNamespaceRepository",
    "FileNamespaceRepository",
    "MemoryNamespaceRepository",
    "NullLock",
    "NamespaceMutex",
    "build_lock",
]
