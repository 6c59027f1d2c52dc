"""
CRUD operations for menus.
"""
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from app.db.models import MenuModel, MenuItemModel
from app.db.schema import MenuCreate, MenuUpdate, MenuItemDraft, MenuItemCreate, MenuItemUpdate
from app.db.base_crud import CRUDBase
from app.db.crud_menu_items import menu_item
from app.core.logging import get_logger

logger = get_logger("db.crud_menus")


class MenuItemNotFound(LookupError):
    """An item referenced by id during a menu save does not exist on that menu."""

    def __init__(self, item_id: int):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id


class CRUDMenu(CRUDBase[MenuModel, MenuCreate, MenuUpdate]):
    def get_by_restaurant(self, db: Session, restaurant_id: int) -> List[MenuModel]:
        """Get all menus of a restaurant."""
        return (
            db.query(MenuModel)
            .filter(MenuModel.restaurant_id == restaurant_id)
            .order_by(MenuModel.id)
            .all()
        )

    def update_by_id(
        self,
        db: Session,
        menu_id: int,
        obj_in: MenuUpdate,
        commit: bool = True
    ) -> Optional[MenuModel]:
        """
        Rename/retemplate an existing menu. Returns None if no row matched.
        """
        db_menu = self.get(db, menu_id)
        if db_menu is None:
            return None
        return self.update(db, db_menu, obj_in.model_dump(), commit=commit)

    def remove(self, db: Session, id: int, commit: bool = True, cascade: bool = False) -> bool:
        """
        Delete a menu.

        Items are deleted in the same transaction only when ``cascade`` is
        set; otherwise they are left to a database-level constraint.
        """
        if cascade:
            menu_item.remove_by_menu(db, id, commit=False)
        deleted = super().remove(db, id, commit=False)
        if commit:
            if deleted:
                db.commit()
            else:
                db.rollback()
        if deleted:
            logger.info(f"Deleted menu {id} (cascade={cascade})")
        return deleted

    def save_with_items(
        self,
        db: Session,
        menu_in: MenuCreate,
        items: List[MenuItemDraft],
        menu_id: Optional[int] = None
    ) -> Optional[Tuple[MenuModel, List[MenuItemModel], bool]]:
        """
        Upsert a menu and each of its items in a single transaction.

        Returns ``(menu, items, created)`` or None when ``menu_id`` matches no
        menu. Raises MenuItemNotFound if an item id is not on the menu; the
        whole save is rolled back on any error.
        """
        created = menu_id is None
        try:
            if created:
                db_menu = self.create(db, menu_in, commit=False)
            else:
                db_menu = self.update_by_id(
                    db,
                    menu_id,
                    MenuUpdate(name=menu_in.name, template_id=menu_in.template_id),
                    commit=False
                )
                if db_menu is None:
                    db.rollback()
                    return None

            saved_items = []
            for draft in items:
                fields = draft.to_fields()
                if draft.id:
                    db_item = menu_item.update_by_id(
                        db, draft.id, MenuItemUpdate(**fields), commit=False, menu_id=db_menu.id
                    )
                    if db_item is None:
                        raise MenuItemNotFound(draft.id)
                else:
                    db_item = menu_item.create(
                        db, MenuItemCreate(menu_id=db_menu.id, **fields), commit=False
                    )
                saved_items.append(db_item)

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(db_menu)
        for db_item in saved_items:
            db.refresh(db_item)
        logger.info(f"Saved menu {db_menu.id} with {len(saved_items)} items (created={created})")
        return db_menu, saved_items, created


menu = CRUDMenu(MenuModel)
