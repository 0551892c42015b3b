from .service import RoleCatalogService

__all__ = ["RoleCatalogService"]
