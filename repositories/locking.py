"""
Estrategias de bloqueo para el ciclo lectura-modificación-escritura.

Cada escritura del servicio carga el snapshot completo, modifica un registro
y lo guarda entero. Sin coordinación, dos escritores concurrentes sobre el
mismo namespace pueden perder actualizaciones (gana el último). La
estrategia se inyecta por servicio.
"""

from contextlib import contextmanager
from typing import Iterator
import threading


class NullLock:
    """Sin coordinación: un único escritor lógico por namespace."""

    @contextmanager
    def hold(self, namespace: str) -> Iterator[None]:
        yield


class NamespaceMutex:
    """Serializa las escrituras de cada namespace dentro del proceso."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, namespace: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(namespace)
            if lock is None:
                lock = threading.RLock()
                self._locks[namespace] = lock
            return lock

    @contextmanager
    def hold(self, namespace: str) -> Iterator[None]:
        lock = self._lock_for(namespace)
        with lock:
            yield


def build_lock(strategy: str):
    """Crea la estrategia configurada ("none" o "mutex")."""
    if strategy == "mutex":
        return NamespaceMutex()
    if strategy == "none":
        return NullLock()
    raise ValueError(f"Estrategia de bloqueo desconocida: {strategy}")
