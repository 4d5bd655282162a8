"""
Utilidades del sistema.
"""
from .datetime_utils import get_local_now, get_local_timezone, to_iso_timestamp

__all__ = ["get_local_now", "get_local_timezone", "to_iso_timestamp"]
