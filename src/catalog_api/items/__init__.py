"""
Catalog items: models and persistence.
"""

from .models import CreateItemDto, Item, ItemDto, UpdateItemDto
from .repository import (
    InMemoryItemsRepository,
    ItemNotFoundError,
    ItemsRepository,
    MongoDbItemsRepository,
)

__all__ = [
    "CreateItemDto",
    "Item",
    "ItemDto",
    "UpdateItemDto",
    "InMemoryItemsRepository",
    "ItemNotFoundError",
    "ItemsRepository",
    "MongoDbItemsRepository",
]
