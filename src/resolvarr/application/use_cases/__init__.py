from .catalog import CatalogUseCase

__all__ = ["CatalogUseCase"]
