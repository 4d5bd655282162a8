"""
Repositorio de namespaces sobre archivos JSON (un archivo por namespace).
"""

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional, Union
import logging
import os

from repositories.base_repository import NamespaceRepository
from core.exceptions import StorageException

logger = logging.getLogger(__name__)


class FileNamespaceRepository(NamespaceRepository):
    """
    Guarda cada snapshot en ``{directorio}/{prefijo}.{namespace}.json``.

    La escritura va a un archivo temporal en el mismo directorio que luego se
    renombra con ``os.replace``; un lector nunca ve un archivo a medio escribir.
    """

    def __init__(self, directory: Union[str, Path], key_prefix: str = "erp", fsync_writes: bool = True):
        super().__init__(key_prefix)
        self.directory = Path(directory)
        self.fsync_writes = fsync_writes

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read_raw(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            logger.error(f"Malformed content in {path}, treating as empty: {e}")
            return ""
        except OSError as e:
            logger.error(f"Error reading {path}: {e}", exc_info=True)
            raise StorageException(f"Error al leer {key}")

    def _write_raw(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        tmp_path = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                if self.fsync_writes:
                    os.fsync(handle.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Error writing {path}: {e}", exc_info=True)
            raise StorageException(f"Error al guardar {key}")
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)

    def health(self) -> bool:
        return self.directory.is_dir() or not self.directory.exists()
