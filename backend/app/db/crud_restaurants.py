"""
CRUD operations for restaurants.
"""
from typing import List
from sqlalchemy.orm import Session

from app.db.models import RestaurantModel
from app.db.schema import RestaurantCreate
from app.db.base_crud import CRUDBase


class CRUDRestaurant(CRUDBase[RestaurantModel, RestaurantCreate, RestaurantCreate]):
    def get_all(self, db: Session) -> List[RestaurantModel]:
        """Get every restaurant sorted by name."""
        return db.query(RestaurantModel).order_by(RestaurantModel.name, RestaurantModel.id).all()


restaurant = CRUDRestaurant(RestaurantModel)
