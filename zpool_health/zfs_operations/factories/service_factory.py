"""
Service factory for dependency injection and service creation.
"""
from typing import Dict, Any, Optional, TextIO

from ..core.interfaces.command_executor import ICommandExecutor
from ..core.interfaces.logger_interface import ILogger
from ..infrastructure.command_executor import CommandExecutor
from ..infrastructure.logging.structured_logger import ContextLogger
from ..services.pool_health_service import PoolHealthService
from ..services.threshold_registry import ThresholdRegistry


class ServiceFactory:
    """Factory for creating service instances with proper dependency injection."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 registry: Optional[ThresholdRegistry] = None,
                 executor: Optional[ICommandExecutor] = None):
        self._config = config or {}
        self._logger_instances: Dict[str, ILogger] = {}
        self._registry = registry or ThresholdRegistry.defaults()
        self._executor: ICommandExecutor = executor or CommandExecutor(
            timeout=self._config.get('command_timeout', 15)
        )

    @property
    def registry(self) -> ThresholdRegistry:
        return self._registry

    def create_pool_health_service(self) -> PoolHealthService:
        """Create a PoolHealthService instance with injected dependencies."""
        return PoolHealthService(
            executor=self._executor,
            registry=self._registry,
            logger=self._get_logger("pool_health_service")
        )

    def _get_logger(self, service_name: str) -> ILogger:
        """Get or create a logger instance for a service."""
        if service_name not in self._logger_instances:
            self._logger_instances[service_name] = ContextLogger(
                name=f"zpool_health.{service_name}",
                level=self._config.get('log_level', 'WARNING'),
                context={"service": service_name},
                stream=self._config.get('log_stream'),
            )
        return self._logger_instances[service_name]


class ServiceFactoryBuilder:
    """Builder for creating ServiceFactory instances with fluent configuration."""

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._registry: Optional[ThresholdRegistry] = None
        self._executor: Optional[ICommandExecutor] = None

    def with_command_timeout(self, timeout: int) -> 'ServiceFactoryBuilder':
        self._config['command_timeout'] = timeout
        return self

    def with_log_level(self, level: str) -> 'ServiceFactoryBuilder':
        self._config['log_level'] = level
        return self

    def with_log_stream(self, stream: TextIO) -> 'ServiceFactoryBuilder':
        self._config['log_stream'] = stream
        return self

    def with_registry(self, registry: ThresholdRegistry) -> 'ServiceFactoryBuilder':
        self._registry = registry
        return self

    def with_executor(self, executor: ICommandExecutor) -> 'ServiceFactoryBuilder':
        self._executor = executor
        return self

    def build(self) -> ServiceFactory:
        return ServiceFactory(self._config, registry=self._registry, executor=self._executor)

