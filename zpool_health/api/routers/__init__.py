from .health_router import router as health_router

__all__ = ["health_router"]
