"""
API routes for restaurants.
"""
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.db.crud_restaurants import restaurant
from app.db.schema import Restaurant, RestaurantCreate
from app.db.session import get_db

router = APIRouter(prefix="/api/restaurants", tags=["Restaurants"])


@router.get("")
async def list_restaurants(db: Session = Depends(get_db)):
    """List every restaurant a menu can be built for."""
    return {
        "restaurants": [
            Restaurant.model_validate(r).model_dump(mode="json")
            for r in restaurant.get_all(db)
        ]
    }


@router.post("", status_code=201)
async def create_restaurant(payload: RestaurantCreate, db: Session = Depends(get_db)):
    """Register a restaurant."""
    if not payload.name:
        raise HTTPException(status_code=400, detail="Missing required field: name")

    db_restaurant = restaurant.create(db, payload)
    return {"restaurant": Restaurant.model_validate(db_restaurant).model_dump(mode="json")}
