from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn
import logging

from config import settings, configure_logging
from core.exceptions import AppException
from models.common import HealthCheckResponse, create_error_response
from routes import entities_router
from dependencies import get_registry, get_repository

logger = logging.getLogger(__name__)

# Configurar logging una sola vez al inicio
configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Maneja el ciclo de vida de la aplicación."""
    # Startup
    if settings.storage_backend == "sql":
        from database.db import create_tables
        create_tables()
    if settings.seed_on_startup:
        from database.seed import seed_database
        created = seed_database(get_registry())
        logger.info(f"Startup seed created {created} records")
    yield
    # Shutdown

app = FastAPI(
    title=settings.app_name,
    description="Almacén persistente de entidades ERP: datos maestros y delivery orders.",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    debug=settings.debug_mode
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Errores de dominio lanzados fuera de los endpoints (p. ej. en dependencias)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(type(exc).__name__, exc.message, exc.details),
    )


@app.get("/")
async def root():
    """Endpoint raíz con información de la API."""
    return {
        "message": f"{settings.app_name} - Almacén de entidades",
        "version": settings.app_version,
        "status": "active",
        "environment": "production" if settings.is_production else "development",
        "namespaces": list(get_registry()),
        "docs": "/docs",
        "redoc": "/redoc"
    }

app.include_router(entities_router)

@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint con verificación del almacenamiento."""
    storage_status = "connected" if get_repository().health() else "disconnected"

    return HealthCheckResponse(
        status="healthy" if storage_status == "connected" else "unhealthy",
        service=settings.app_name,
        version=settings.app_version,
        storage=storage_status,
        environment="production" if settings.is_production else "development",
    )

if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
