"""
Catalog item data models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Item(BaseModel):
    """
    A catalog item as stored by the repository.

    ``id`` and ``created_date`` are set on creation and never change.
    """

    id: UUID = Field(default_factory=uuid4, description="Item identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Free-form description")
    price: Decimal = Field(..., description="Unit price")
    created_date: datetime = Field(
        default_factory=utcnow,
        description="When the item was created (UTC)",
    )

    def to_document(self) -> Dict[str, Any]:
        """
        Encode as a MongoDB document.

        The id and creation date are stored as strings so documents stay
        readable from any client.
        """
        return {
            "_id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "created_date": self.created_date.isoformat(),
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Item":
        return cls(
            id=UUID(document["_id"]),
            name=document["name"],
            description=document.get("description") or "",
            price=Decimal(str(document["price"])),
            created_date=datetime.fromisoformat(document["created_date"]),
        )

    def as_dto(self) -> "ItemDto":
        return ItemDto(**self.model_dump())


class ItemDto(BaseModel):
    """Item representation returned by the API."""

    id: UUID
    name: str
    description: str = ""
    price: Decimal
    created_date: datetime


class CreateItemDto(BaseModel):
    """Payload for creating an item."""

    name: str = Field(..., min_length=1, description="Display name")
    description: Optional[str] = Field(None, description="Free-form description")
    price: Decimal = Field(..., ge=1, le=1000, description="Unit price (1-1000)")


class UpdateItemDto(BaseModel):
    """Payload for replacing an item's editable fields."""

    name: str = Field(..., min_length=1, description="Display name")
    description: Optional[str] = Field(None, description="Free-form description")
    price: Decimal = Field(..., ge=1, le=1000, description="Unit price (1-1000)")
