"""
Utilidades para manejo de fechas y zonas horarias.

Todas las marcas de tiempo del almacén se generan en la zona horaria
configurada de la aplicación y se guardan como cadenas ISO-8601 con offset.
"""
from datetime import datetime
from zoneinfo import ZoneInfo
from config import settings


def get_local_timezone() -> ZoneInfo:
    """
    Obtiene la zona horaria configurada.
    
    Returns:
        ZoneInfo: Zona horaria de la aplicación.
    """
    return ZoneInfo(settings.timezone)


def get_local_now() -> datetime:
    """
    Obtiene la fecha y hora actual en la zona horaria local configurada.
    
    Returns:
        datetime: Fecha y hora actual con zona horaria.
    """
    return datetime.now(get_local_timezone())


def to_iso_timestamp(dt: datetime) -> str:
    """Serializa un datetime (naive se asume local) a ISO-8601 con offset."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=get_local_timezone())
    return dt.isoformat()
