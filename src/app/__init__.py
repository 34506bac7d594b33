"""Application wiring - builds the service layer from settings."""

from .dependencies import Services, build_services, build_store, configure_logging

__all__ = ["Services", "build_services", "build_store", "configure_logging"]
