"""
API routes for menu items.
"""
from fastapi import APIRouter, HTTPException, Query, Depends, Response
from typing import Optional
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db.crud_menu_items import menu_item
from app.db.schema import MenuItem, MenuItemCreate, MenuItemUpdate, MenuItemUpsertRequest
from app.db.session import get_db

logger = get_logger("api.routes_menu_items")
router = APIRouter(prefix="/api/menuItems", tags=["Menu Items"])


def _serialize(db_item) -> dict:
    return MenuItem.model_validate(db_item).model_dump(mode="json")


@router.get("")
async def list_menu_items(
    menu_id: Optional[int] = Query(None, alias="menuId", description="Owning menu"),
    db: Session = Depends(get_db)
):
    """List the items of a menu."""
    if menu_id is None:
        raise HTTPException(status_code=400, detail="Missing menuId parameter")

    try:
        items = menu_item.get_by_menu(db, menu_id)
        return {"menuItems": [_serialize(i) for i in items]}
    except Exception as e:
        logger.error(f"Error fetching items: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("")
async def upsert_menu_item(
    payload: MenuItemUpsertRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Create or update a single item.

    - **id** present: replace name, description, price and category (200, 404 if absent)
    - **id** absent: insert into **menuId** (201)

    Missing description/category default to "" and a missing price to 0.
    """
    if not payload.menu_id or not payload.name:
        raise HTTPException(status_code=400, detail="Missing required fields: menuId, name")

    fields = payload.to_fields()
    try:
        if payload.id:
            db_item = menu_item.update_by_id(db, payload.id, MenuItemUpdate(**fields))
            if db_item is None:
                raise HTTPException(status_code=404, detail="Item not found")
        else:
            db_item = menu_item.create(db, MenuItemCreate(menu_id=payload.menu_id, **fields))
            response.status_code = 201

        return {"item": _serialize(db_item)}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving item: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("")
async def delete_menu_item(
    item_id: Optional[int] = Query(None, alias="itemId", description="Item to delete"),
    db: Session = Depends(get_db)
):
    """Delete a single item."""
    if item_id is None:
        raise HTTPException(status_code=400, detail="Missing itemId parameter")

    try:
        if not menu_item.remove(db, item_id):
            raise HTTPException(status_code=404, detail="Item not found")
        return {"success": True}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting item: {e}")
        raise HTTPException(status_code=500, detail=str(e))
