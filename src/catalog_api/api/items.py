"""
Catalog item API endpoints.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..items import (
    CreateItemDto,
    Item,
    ItemDto,
    ItemNotFoundError,
    ItemsRepository,
    UpdateItemDto,
)
from .dependencies import get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=List[ItemDto])
async def get_items(
    name: Optional[str] = Query(None, description="Only items whose name contains this text"),
    repository: ItemsRepository = Depends(get_repository),
) -> List[ItemDto]:
    """
    List catalog items.

    Args:
        name: Optional case-insensitive name filter

    Returns:
        Matching items
    """
    items = await repository.get_items(name_to_match=name)
    logger.info(f"Retrieved {len(items)} item(s) (name={name})")
    return [item.as_dto() for item in items]


@router.get("/{item_id}", response_model=ItemDto)
async def get_item(
    item_id: UUID,
    repository: ItemsRepository = Depends(get_repository),
) -> ItemDto:
    item = await repository.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return item.as_dto()


@router.post("", response_model=ItemDto, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: CreateItemDto,
    response: Response,
    repository: ItemsRepository = Depends(get_repository),
) -> ItemDto:
    """
    Create an item.

    The new item's location is returned in the ``Location`` header.
    """
    item = Item(
        name=payload.name,
        description=payload.description or "",
        price=payload.price,
    )
    await repository.create_item(item)

    response.headers["Location"] = f"{router.prefix}/{item.id}"
    return item.as_dto()


@router.put("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_item(
    item_id: UUID,
    payload: UpdateItemDto,
    repository: ItemsRepository = Depends(get_repository),
) -> Response:
    """Replace name, description and price; id and creation date are kept."""
    existing = await repository.get_item(item_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    updated = existing.model_copy(
        update={
            "name": payload.name,
            "description": payload.description or "",
            "price": payload.price,
        }
    )
    try:
        await repository.update_item(updated)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    repository: ItemsRepository = Depends(get_repository),
) -> Response:
    try:
        await repository.delete_item(item_id)
    except ItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
