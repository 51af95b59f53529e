"""
Catalog item persistent storage.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID

from pymongo import MongoClient

from .models import Item

logger = logging.getLogger(__name__)


class ItemNotFoundError(Exception):
    """Raised when updating or deleting an item that does not exist."""

    def __init__(self, item_id: UUID):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class ItemsRepository(ABC):
    """CRUD operations over catalog items."""

    @abstractmethod
    async def get_item(self, item_id: UUID) -> Optional[Item]:
        """Return the item, or None if it does not exist."""

    @abstractmethod
    async def get_items(self, name_to_match: Optional[str] = None) -> List[Item]:
        """Return all items, optionally only those whose name contains ``name_to_match``."""

    @abstractmethod
    async def create_item(self, item: Item) -> None:
        ...

    @abstractmethod
    async def update_item(self, item: Item) -> None:
        """Replace a stored item. Raises ItemNotFoundError if missing."""

    @abstractmethod
    async def delete_item(self, item_id: UUID) -> None:
        """Remove an item. Raises ItemNotFoundError if missing."""


class MongoDbItemsRepository(ItemsRepository):
    """
    Items stored in a MongoDB collection.

    Driver calls are blocking, so each one runs on a worker thread.
    """

    def __init__(
        self,
        client: MongoClient,
        database_name: str = "catalog",
        collection_name: str = "items",
    ):
        """
        Initialize the repository.

        Args:
            client: Shared MongoDB client (connection pooling is the driver's job)
            database_name: Database holding the collection
            collection_name: Collection holding item documents
        """
        self.collection = client[database_name][collection_name]
        logger.info(f"Using MongoDB collection {database_name}.{collection_name}")

    async def get_item(self, item_id: UUID) -> Optional[Item]:
        document = await asyncio.to_thread(
            self.collection.find_one, {"_id": str(item_id)}
        )
        if document is None:
            return None
        return Item.from_document(document)

    async def get_items(self, name_to_match: Optional[str] = None) -> List[Item]:
        query = {}
        if name_to_match:
            query["name"] = {"$regex": re.escape(name_to_match), "$options": "i"}

        documents = await asyncio.to_thread(
            lambda: list(self.collection.find(query))
        )
        return [Item.from_document(document) for document in documents]

    async def create_item(self, item: Item) -> None:
        await asyncio.to_thread(self.collection.insert_one, item.to_document())
        logger.info(f"Created item {item.id}")

    async def update_item(self, item: Item) -> None:
        result = await asyncio.to_thread(
            self.collection.replace_one, {"_id": str(item.id)}, item.to_document()
        )
        if result.matched_count == 0:
            raise ItemNotFoundError(item.id)
        logger.info(f"Updated item {item.id}")

    async def delete_item(self, item_id: UUID) -> None:
        result = await asyncio.to_thread(
            self.collection.delete_one, {"_id": str(item_id)}
        )
        if result.deleted_count == 0:
            raise ItemNotFoundError(item_id)
        logger.info(f"Deleted item {item_id}")


class InMemoryItemsRepository(ItemsRepository):
    """Items kept in a dict; contents are lost on restart."""

    def __init__(self):
        self._items: Dict[UUID, Item] = {}

    async def get_item(self, item_id: UUID) -> Optional[Item]:
        return self._items.get(item_id)

    async def get_items(self, name_to_match: Optional[str] = None) -> List[Item]:
        items = list(self._items.values())
        if name_to_match:
            needle = name_to_match.lower()
            items = [item for item in items if needle in item.name.lower()]
        return items

    async def create_item(self, item: Item) -> None:
        self._items[item.id] = item

    async def update_item(self, item: Item) -> None:
        if item.id not in self._items:
            raise ItemNotFoundError(item.id)
        self._items[item.id] = item

    async def delete_item(self, item_id: UUID) -> None:
        if self._items.pop(item_id, None) is None:
            raise ItemNotFoundError(item_id)
