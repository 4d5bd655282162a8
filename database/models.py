from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def get_current_time():
    """Obtiene la hora actual en la zona horaria local configurada."""
    from utils.datetime_utils import get_local_now
    return get_local_now().replace(tzinfo=None)


#ORM: un snapshot completo por namespace (payload = arreglo JSON de registros)
class NamespaceORM(Base):
    __tablename__ = "entity_namespaces"
    storage_key = Column(String(200), primary_key=True)
    payload = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime, default=get_current_time, onupdate=get_current_time)
