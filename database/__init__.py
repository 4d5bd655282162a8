from .db import (
    SessionLocal,
    build_engine,
    check_connection,
    create_tables,
    engine,
    get_database_url,
)
from .models import Base, NamespaceORM

__all__ = [
    "SessionLocal",
    "build_engine",
    "check_connection",
    "create_tables",
    "engine",
    "get_database_url",
    "Base",
    "NamespaceORM",
]
