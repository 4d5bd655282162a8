"""
Funciones de utilidad generales: identificadores, marcas de auditoría y CSV.
"""

import csv
import io
import json
import secrets
import time
from typing import Optional, Any, Iterable, Mapping

from utils.datetime_utils import get_local_now, to_iso_timestamp

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_SUFFIX_LENGTH = 9


def _to_base36(number: int, width: int) -> str:
    chars = []
    for _ in range(width):
        number, remainder = divmod(number, 36)
        chars.append(_BASE36[remainder])
    return "".join(reversed(chars))


def generate_id() -> str:
    """
    Genera un identificador único para un registro.

    Formato ``{epoch_ms}-{sufijo}``: la parte temporal distingue llamadas
    sucesivas y el sufijo aleatorio (9 caracteres base36, CSPRNG) evita
    colisiones dentro del mismo milisegundo.

    Returns:
        Identificador opaco como cadena
    """
    timestamp_ms = int(time.time() * 1000)
    suffix = _to_base36(secrets.randbelow(36 ** _SUFFIX_LENGTH), _SUFFIX_LENGTH)
    return f"{timestamp_ms}-{suffix}"


def now_timestamp() -> str:
    """Marca de tiempo actual (zona configurada) en ISO-8601."""
    return to_iso_timestamp(get_local_now())


def create_timestamps(user_id: Optional[str] = None) -> dict[str, Any]:
    """
    Campos de auditoría de un registro recién creado.

    Args:
        user_id: ID del usuario que crea el registro (puede ser None)

    Returns:
        Diccionario con created_at/updated_at (iguales), created_by/updated_by
        e is_deleted=False
    """
    now = now_timestamp()
    return {
        "created_at": now,
        "updated_at": now,
        "created_by": user_id,
        "updated_by": user_id,
        "is_deleted": False,
    }


def update_timestamps(user_id: Optional[str] = None) -> dict[str, Any]:
    """Campos de auditoría a refrescar en cada modificación (incluido el soft delete)."""
    return {
        "updated_at": now_timestamp(),
        "updated_by": user_id,
    }


def _csv_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str, ensure_ascii=False)
    return value


def records_to_csv(records: list[Mapping[str, Any]]) -> str:
    """
    Convierte registros a texto CSV.

    La cabecera se toma de las claves del primer registro; los valores
    anidados (listas, diccionarios) se serializan como JSON.

    Args:
        records: Registros a exportar

    Returns:
        Texto CSV (cadena vacía si no hay registros)
    """
    if not records:
        return ""

    headers = list(records[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for record in records:
        writer.writerow([_csv_cell(record.get(header)) for header in headers])
    return buffer.getvalue()


def parse_csv(text: str) -> list[dict[str, str]]:
    """
    Parsea texto CSV con cabecera a una lista de filas.

    Las líneas en blanco se ignoran; las celdas ausentes quedan como "".
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        return []

    reader = csv.reader(lines)
    headers = [header.strip() for header in next(reader)]
    rows = []
    for values in reader:
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else ""
        rows.append(row)
    return rows


def csv_header(fields: Iterable[str]) -> str:
    """Línea de cabecera CSV para una plantilla de importación."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(list(fields))
    return buffer.getvalue()
