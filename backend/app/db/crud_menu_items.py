"""
CRUD operations for menu items.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from app.db.models import MenuItemModel
from app.db.schema import MenuItemCreate, MenuItemUpdate
from app.db.base_crud import CRUDBase
from app.core.logging import get_logger

logger = get_logger("db.crud_menu_items")


class CRUDMenuItem(CRUDBase[MenuItemModel, MenuItemCreate, MenuItemUpdate]):
    def get_by_menu(self, db: Session, menu_id: int) -> List[MenuItemModel]:
        """Get all items of a menu in insertion order."""
        return (
            db.query(MenuItemModel)
            .filter(MenuItemModel.menu_id == menu_id)
            .order_by(MenuItemModel.id)
            .all()
        )

    def update_by_id(
        self,
        db: Session,
        item_id: int,
        obj_in: MenuItemUpdate,
        commit: bool = True,
        menu_id: Optional[int] = None
    ) -> Optional[MenuItemModel]:
        """
        Replace the editable fields of an item.

        When ``menu_id`` is given the item must also belong to that menu.
        Returns None if no row matched. ``menu_id`` itself is never changed.
        """
        query = db.query(MenuItemModel).filter(MenuItemModel.id == item_id)
        if menu_id is not None:
            query = query.filter(MenuItemModel.menu_id == menu_id)
        db_item = query.first()
        if db_item is None:
            return None
        return self.update(db, db_item, obj_in.model_dump(), commit=commit)

    def remove_by_menu(self, db: Session, menu_id: int, commit: bool = True) -> int:
        """Delete every item of a menu. Returns the number of rows removed."""
        deleted = (
            db.query(MenuItemModel)
            .filter(MenuItemModel.menu_id == menu_id)
            .delete(synchronize_session=False)
        )
        if commit:
            db.commit()
        logger.debug(f"Removed {deleted} items of menu {menu_id}")
        return deleted


menu_item = CRUDMenuItem(MenuItemModel)
