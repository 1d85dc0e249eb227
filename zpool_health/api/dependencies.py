"""
Dependencies for API endpoints.
"""
from functools import lru_cache
from typing import Optional

from ..config import get_config
from ..zfs_operations.factories.service_factory import ServiceFactory, ServiceFactoryBuilder
from ..zfs_operations.services.pool_health_service import PoolHealthService


# Global service factory instance
_service_factory: Optional[ServiceFactory] = None


@lru_cache()
def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance, built from the environment config."""
    global _service_factory
    if _service_factory is None:
        config = get_config()
        _service_factory = ServiceFactoryBuilder() \
            .with_command_timeout(config.check.timeout) \
            .with_log_level(config.logging.level) \
            .with_registry(config.build_registry()) \
            .build()
    return _service_factory


async def get_pool_health_service() -> PoolHealthService:
    """Get a PoolHealthService instance."""
    return get_service_factory().create_pool_health_service()


def configure_services(factory: Optional[ServiceFactory]):
    """Replace the global factory; passing None rebuilds it from config on next use."""
    global _service_factory
    _service_factory = factory
    # Clear the cache to force recreation
    get_service_factory.cache_clear()
