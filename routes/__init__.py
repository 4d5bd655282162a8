from .entities import router as entities_router

__all__ = [
    "entities_router",
]
