"""
Servicio base de entidades: contrato CRUD genérico sobre un namespace.

``create_service`` une un namespace, sus campos de búsqueda y un validador
opcional con un repositorio de namespaces inyectado. Todas las operaciones
de escritura cargan el snapshot completo, modifican un registro y guardan el
snapshot entero (lectura-modificación-escritura) bajo la estrategia de
bloqueo configurada.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union
import logging

from repositories.base_repository import NamespaceRepository
from repositories.locking import NullLock
from core.exceptions import NotFoundException, ValidationException
from core.pagination import ListResult
from core.query import ListParams, run_query
from core.utils import (
    generate_id,
    create_timestamps,
    update_timestamps,
    records_to_csv,
    parse_csv,
    csv_header,
)
from models.common import ENVELOPE_FIELDS, MutationResult, DeleteResult, ImportResult
from services.validation import Validator, normalize_result

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_FIELDS = ("name", "description", "status", "code")


class EntityService:
    """
    Servicio CRUD genérico para un tipo de registro.

    Los registros son diccionarios JSON con el sobre común (id, created_at,
    updated_at, created_by, updated_by, is_deleted). El borrado es siempre
    lógico: los registros eliminados dejan de verse en list/get/update/remove
    pero permanecen en el snapshot.
    """

    def __init__(
        self,
        namespace: str,
        repository: NamespaceRepository,
        search_fields: Sequence[str] = (),
        validate: Optional[Validator] = None,
        lock=None,
        template_fields: Optional[Sequence[str]] = None,
    ):
        """
        Inicializa el servicio.

        Args:
            namespace: Nombre lógico de la entidad (p. ej. "delivery-orders")
            repository: Medio persistente de snapshots
            search_fields: Campos sobre los que se busca el texto libre ``q``
            validate: Validador opcional del registro candidato
            lock: Estrategia de bloqueo (NullLock por defecto)
            template_fields: Columnas de la plantilla CSV de importación
        """
        self.namespace = namespace
        self.repository = repository
        self.search_fields = tuple(search_fields)
        self.validate = validate
        self.lock = lock or NullLock()
        self.template_fields = tuple(template_fields or DEFAULT_TEMPLATE_FIELDS)

    def __repr__(self) -> str:
        return f"EntityService(namespace={self.namespace!r})"

    # ==================== Lectura ====================

    def list(self, params: Optional[Union[ListParams, Mapping[str, Any]]] = None) -> ListResult:
        """
        Lista registros vivos aplicando búsqueda, filtros, orden y paginación.

        Args:
            params: ListParams o diccionario equivalente

        Returns:
            ListResult con la página y el total filtrado
        """
        return run_query(self.repository.load(self.namespace), params, self.search_fields)

    def get(self, id: str) -> Optional[dict[str, Any]]:
        """
        Obtiene un registro vivo por su ID.

        Args:
            id: ID del registro

        Returns:
            El registro o None si no existe o está eliminado
        """
        for item in self.repository.load(self.namespace):
            if item.get("id") == id and not item.get("is_deleted"):
                return item
        return None

    # ==================== Escritura ====================

    def create(self, data: Mapping[str, Any], user_id: Optional[str] = None) -> MutationResult:
        """
        Crea un registro nuevo.

        Args:
            data: Campos de dominio (los campos del sobre se ignoran)
            user_id: ID del usuario que crea el registro (auditoría)

        Returns:
            MutationResult con el ID asignado y el registro completo

        Raises:
            ValidationException: Si el validador rechaza el payload (no se escribe nada)
        """
        payload = self._strip_envelope(data)
        self._run_validation(payload)

        with self.lock.hold(self.namespace):
            records = self.repository.load(self.namespace)
            id = generate_id()
            item = self.repository.normalize(
                self.namespace, {**payload, "id": id, **create_timestamps(user_id)}
            )
            records.append(item)
            self.repository.save(self.namespace, records)

        logger.info(f"{self.namespace} {id} created by {user_id}")
        return MutationResult(id=id, data=item)

    def update(
        self,
        id: str,
        data: Mapping[str, Any],
        user_id: Optional[str] = None,
    ) -> MutationResult:
        """
        Actualiza parcialmente un registro vivo.

        Args:
            id: ID del registro
            data: Campos a sobrescribir (los campos del sobre se ignoran)
            user_id: ID del usuario que actualiza (auditoría)

        Returns:
            MutationResult con el registro completo actualizado

        Raises:
            NotFoundException: Si no existe un registro vivo con ese ID
            ValidationException: Si el registro combinado no es válido
        """
        partial = self._strip_envelope(data)

        with self.lock.hold(self.namespace):
            records = self.repository.load(self.namespace)
            index = self._find_live_index(records, id)

            merged = {**records[index], **partial}
            self._run_validation(merged)

            updated = self.repository.normalize(self.namespace, {**merged, **self._touch(user_id)})
            records[index] = updated
            self.repository.save(self.namespace, records)

        logger.info(f"{self.namespace} {id} updated by {user_id}")
        return MutationResult(id=id, data=updated)

    def remove(self, id: str, user_id: Optional[str] = None) -> DeleteResult:
        """
        Elimina un registro (siempre soft delete).

        Args:
            id: ID del registro
            user_id: ID del usuario que elimina (auditoría)

        Raises:
            NotFoundException: Si no existe un registro vivo con ese ID
        """
        with self.lock.hold(self.namespace):
            records = self.repository.load(self.namespace)
            index = self._find_live_index(records, id)
            records[index] = {**records[index], "is_deleted": True, **self._touch(user_id)}
            self.repository.save(self.namespace, records)

        logger.info(f"{self.namespace} {id} deleted by {user_id}")
        return DeleteResult(success=True)

    # ==================== CSV ====================

    def export_csv(self, params: Optional[Union[ListParams, Mapping[str, Any]]] = None) -> str:
        """Exporta a CSV la página resultante de ``list(params)``."""
        return records_to_csv(self.list(params).data)

    def import_csv(self, text: str, user_id: Optional[str] = None) -> ImportResult:
        """
        Importa filas CSV creando un registro por fila.

        Las filas inválidas se omiten y se reportan como ``Row {n}: {errores}``
        (n empieza en 1, sin contar la cabecera).

        Args:
            text: Contenido CSV con cabecera
            user_id: ID del usuario que importa

        Returns:
            ImportResult con el ID del trabajo, filas importadas y errores
        """
        errors = []
        imported = 0

        for index, row in enumerate(parse_csv(text), start=1):
            try:
                self.create(row, user_id=user_id)
                imported += 1
            except ValidationException as e:
                errors.append(f"Row {index}: {e.errors or e.message}")

        job_id = generate_id()
        logger.info(f"{self.namespace} import {job_id}: {imported} imported, {len(errors)} rejected")
        return ImportResult(job_id=job_id, imported=imported, errors=errors or None)

    def template_csv(self) -> str:
        """Cabecera CSV de la plantilla de importación."""
        return csv_header(self.template_fields)

    # ==================== Helpers ====================

    def _strip_envelope(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in dict(data).items() if key not in ENVELOPE_FIELDS}

    def _touch(self, user_id: Optional[str]) -> dict[str, Any]:
        stamps = update_timestamps(user_id)
        # sin actor explícito se conserva el updated_by anterior
        if user_id is None:
            stamps.pop("updated_by")
        return stamps

    def _run_validation(self, candidate: dict[str, Any]) -> None:
        if self.validate is None:
            return
        result = normalize_result(self.validate(candidate))
        if not result.success:
            logger.warning(f"Validation failed for {self.namespace}: {result.errors}")
            raise ValidationException(
                message=f"Validación fallida para {self.namespace}",
                errors=result.errors or {},
            )

    def _find_live_index(self, records: List[dict[str, Any]], id: str) -> int:
        for index, item in enumerate(records):
            if item.get("id") == id and not item.get("is_deleted"):
                return index
        raise NotFoundException(resource=self.namespace, identifier=str(id))


def create_service(
    namespace: str,
    search_fields: Sequence[str] = (),
    validate: Optional[Validator] = None,
    *,
    repository: NamespaceRepository,
    lock=None,
    template_fields: Optional[Sequence[str]] = None,
) -> EntityService:
    """
    Crea el servicio CRUD de un namespace.

    Args:
        namespace: Nombre lógico de la entidad
        search_fields: Campos de búsqueda de texto libre
        validate: Validador opcional
        repository: Medio persistente (inyectado explícitamente)
        lock: Estrategia de bloqueo
        template_fields: Columnas de la plantilla CSV

    Returns:
        EntityService listo para usar
    """
    return EntityService(
        namespace=namespace,
        repository=repository,
        search_fields=search_fields,
        validate=validate,
        lock=lock,
        template_fields=template_fields,
    )
