"""módulo de base de datos: engine, sesiones y creación de tablas del almacén."""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from .models import Base

#import configuration
from config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Crea un engine; SQLite necesita compartir la conexión entre hilos."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,  #verifica conexiones antes de usarlas
        connect_args=connect_args,
    )


#engine / session con configuración centralizada
engine = build_engine(settings.database_url, echo=settings.debug_mode)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def create_tables(bind: Engine = None) -> None:
    """Crear tablas ORM en la base de datos.
    
    Raises:
        SQLAlchemyError: Si hay error al crear las tablas
    """
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Tablas de base de datos creadas/verificadas exitosamente")
    except SQLAlchemyError as e:
        logger.error(f"Error al crear tablas: {e}", exc_info=True)
        raise


def check_connection(bind: Engine = None) -> bool:
    """Verifica que la base de datos responda (usado por el health check)."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Health check: Error de conexión a BD: {e}")
        return False


def get_database_url() -> str:
    """Obtiene la URL de la base de datos (sin credenciales sensibles)."""
    url = str(engine.url)
    #ocultar credenciales si existen
    if '@' in url:
        parts = url.split('@')
        return f"***@{parts[1]}"
    return url
