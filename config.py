"""
Configuración centralizada de la aplicación usando pydantic-settings.

Este módulo maneja todas las variables de entorno y configuraciones
del almacén de entidades de manera tipada y validada.
"""
import logging
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Configuración de la aplicación cargada desde variables de entorno."""

    # Application
    app_name: str = Field(
        default="ERP Entity Store",
        description="Nombre de la aplicación"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Versión de la aplicación"
    )
    debug_mode: bool = Field(
        default=False,
        description="Modo debug (solo para desarrollo)"
    )

    # Storage
    database_url: str = Field(
        default="sqlite:///./erp_store.db",
        description="URL de conexión a la base de datos (backend sql)"
    )
    storage_backend: Literal["sql", "file", "memory"] = Field(
        default="sql",
        description="Medio persistente de los namespaces"
    )
    storage_dir: str = Field(
        default="./data",
        description="Directorio de los archivos JSON (backend file)"
    )
    storage_key_prefix: str = Field(
        default="erp",
        description="Prefijo de las claves de almacenamiento (prefijo.namespace)"
    )
    lock_strategy: Literal["none", "mutex"] = Field(
        default="none",
        description="Estrategia de bloqueo para lectura-modificación-escritura"
    )
    seed_on_startup: bool = Field(
        default=False,
        description="Cargar datos maestros de referencia al arrancar"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost,http://localhost:3000,http://localhost:5173,http://localhost:8000",
        description="Orígenes permitidos para CORS, separados por coma"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # Timezone
    timezone: str = Field(
        default="Asia/Jakarta",
        description="Zona horaria de la aplicación (formato IANA)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida que el nivel de logging sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(
                f"Nivel de log '{v}' no válido. Usando 'INFO'. "
                f"Niveles válidos: {valid_levels}"
            )
            return "INFO"
        return v_upper

    @field_validator("storage_key_prefix")
    @classmethod
    def validate_storage_key_prefix(cls, v: str) -> str:
        """Normaliza el prefijo (sin puntos sobrantes)."""
        v = v.strip().strip(".")
        if not v:
            raise ValueError("storage_key_prefix no puede estar vacío")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Devuelve la lista de orígenes CORS permitidos."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Determina si la app está en modo producción."""
        return not self.debug_mode


# Instancia global de configuración
settings = Settings()


def configure_logging():
    """Configura el sistema de logging de la aplicación."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=log_format,
        handlers=[
            logging.StreamHandler(),
        ]
    )

    # Reducir verbosidad de librerías externas
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info(f"Logging configurado en nivel {settings.log_level}")
    logger.info(f"Aplicación: {settings.app_name} v{settings.app_version}")
    logger.info(f"Almacenamiento: {settings.storage_backend} (bloqueo: {settings.lock_strategy})")


def get_settings() -> Settings:
    """Retorna la instancia de configuración (útil para dependency injection)."""
    return settings
