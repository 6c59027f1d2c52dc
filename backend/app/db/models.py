"""
SQLAlchemy database models.
These define the database schema and relationships.
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime

from app.core.constants import MenuConstants, LimitsConstants

Base = declarative_base()


class RestaurantModel(Base):
    """Restaurant database model."""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(LimitsConstants.NAME_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    menus = relationship("MenuModel", back_populates="restaurant")


class MenuModel(Base):
    """Restaurant menu model."""
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(LimitsConstants.NAME_MAX_LENGTH), nullable=False)
    template_id = Column(String(LimitsConstants.TEMPLATE_MAX_LENGTH), nullable=False, default=MenuConstants.DEFAULT_TEMPLATE)  # "modern", "classic", "minimal"
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    # No ORM cascade: item cleanup on delete is opt-in (see crud_menus.remove)
    restaurant = relationship("RestaurantModel", back_populates="menus")
    items = relationship("MenuItemModel", back_populates="menu", passive_deletes="all")


class MenuItemModel(Base):
    """Single line item on a menu."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=False, index=True)
    name = Column(String(LimitsConstants.NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default=MenuConstants.DEFAULT_DESCRIPTION)
    price = Column(Numeric(10, LimitsConstants.PRICE_DECIMAL_PLACES, asdecimal=False), nullable=False, default=MenuConstants.DEFAULT_PRICE)
    category = Column(String(LimitsConstants.CATEGORY_MAX_LENGTH), nullable=False, default=MenuConstants.DEFAULT_CATEGORY)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menu = relationship("MenuModel", back_populates="items")
