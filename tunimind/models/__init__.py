# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from tunimind.models.storage_item import StorageItem

__all__ = [
    "StorageItem",
]
