"""
API routes for menus.
"""
from fastapi import APIRouter, HTTPException, Query, Depends, Response
from typing import Optional
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.constants import MenuConstants
from app.core.logging import get_logger
from app.db import crud_menus
from app.db.crud_menus import MenuItemNotFound
from app.db.schema import (
    Menu, MenuItem, MenuCreate, MenuUpdate, MenuUpsertRequest, MenuSaveRequest
)
from app.db.session import get_db

logger = get_logger("api.routes_menus")
router = APIRouter(prefix="/api/menus", tags=["Menus"])


def _serialize(db_menu) -> dict:
    return Menu.model_validate(db_menu).model_dump(mode="json")


def _require_menu_fields(payload: MenuUpsertRequest) -> None:
    """Reject bodies without restaurantId, name or a known templateId."""
    if not payload.restaurant_id or not payload.name or not payload.template_id:
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: restaurantId, name, or templateId"
        )
    if not MenuConstants.is_valid_template(payload.template_id):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid templateId: {payload.template_id} "
                   f"(expected one of {', '.join(MenuConstants.TEMPLATES)})"
        )


@router.get("")
async def list_menus(
    restaurant_id: Optional[int] = Query(None, alias="restaurantId", description="Owning restaurant"),
    db: Session = Depends(get_db)
):
    """
    List all menus of a restaurant.

    Returns an empty list for a restaurant with no menus.
    """
    if restaurant_id is None:
        raise HTTPException(status_code=400, detail="Missing parameter: restaurantId")

    try:
        menus = crud_menus.menu.get_by_restaurant(db, restaurant_id)
        return {"menus": [_serialize(m) for m in menus]}
    except Exception as e:
        logger.error(f"Error fetching menus: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{menu_id}")
async def get_menu(menu_id: int, db: Session = Depends(get_db)):
    """Get a single menu by id."""
    db_menu = crud_menus.menu.get(db, menu_id)
    if db_menu is None:
        raise HTTPException(status_code=404, detail="Menu not found")
    return {"menu": _serialize(db_menu)}


@router.post("")
async def upsert_menu(
    payload: MenuUpsertRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Create or update a menu.

    - **id** present: update name and template of that menu (200, 404 if absent)
    - **id** absent: insert a new menu for **restaurantId** (201)
    """
    _require_menu_fields(payload)

    try:
        if payload.id:
            db_menu = crud_menus.menu.update_by_id(
                db,
                payload.id,
                MenuUpdate(name=payload.name, template_id=payload.template_id)
            )
            if db_menu is None:
                raise HTTPException(status_code=404, detail="Menu not found")
        else:
            db_menu = crud_menus.menu.create(
                db,
                MenuCreate(
                    restaurant_id=payload.restaurant_id,
                    name=payload.name,
                    template_id=payload.template_id
                )
            )
            response.status_code = 201
            logger.info(f"Created menu {db_menu.id} for restaurant {payload.restaurant_id}")

        return {"menu": _serialize(db_menu)}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error upserting menu: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/save")
async def save_menu_with_items(
    payload: MenuSaveRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Save a menu and its whole item list atomically.

    Items with an id are updated (they must belong to the menu), the rest are
    inserted. Nothing is written if any step fails.
    """
    _require_menu_fields(payload)
    for index, item in enumerate(payload.items):
        if not item.name:
            raise HTTPException(
                status_code=400,
                detail=f"Missing required field: name (item {index})"
            )

    try:
        result = crud_menus.menu.save_with_items(
            db,
            MenuCreate(
                restaurant_id=payload.restaurant_id,
                name=payload.name,
                template_id=payload.template_id
            ),
            payload.items,
            menu_id=payload.id or None
        )
        if result is None:
            raise HTTPException(status_code=404, detail="Menu not found")

        db_menu, db_items, created = result
        if created:
            response.status_code = 201

        return {
            "menu": _serialize(db_menu),
            "menuItems": [MenuItem.model_validate(i).model_dump(mode="json") for i in db_items]
        }

    except HTTPException:
        raise
    except MenuItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving menu: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("")
async def delete_menu(
    menu_id: Optional[int] = Query(None, alias="menuId", description="Menu to delete"),
    db: Session = Depends(get_db)
):
    """
    Delete a menu.

    Its items are only removed when MENU_DELETE_CASCADE is enabled; otherwise
    that is left to a foreign-key constraint configured on the database.
    """
    if menu_id is None:
        raise HTTPException(status_code=400, detail="Missing menuId parameter")

    try:
        deleted = crud_menus.menu.remove(
            db, menu_id, cascade=get_settings().menu_delete_cascade
        )
        if not deleted:
            raise HTTPException(status_code=404, detail="Menu not found")
        return {"success": True}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting menu: {e}")
        raise HTTPException(status_code=500, detail=str(e))
