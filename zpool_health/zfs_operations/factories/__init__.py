from .service_factory import ServiceFactory, ServiceFactoryBuilder

__all__ = ["ServiceFactory", "ServiceFactoryBuilder"]
