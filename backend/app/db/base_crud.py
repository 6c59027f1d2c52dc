"""
Generic CRUD helpers shared by the resource-specific CRUD classes.
"""
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    CRUD object with default methods to Create, Read, Update, Delete.

    Each write commits unless ``commit=False`` is passed, in which case the
    caller owns the transaction and only a flush is issued.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _finish(self, db: Session, obj: ModelType, commit: bool) -> None:
        if commit:
            db.commit()
            db.refresh(obj)
        else:
            db.flush()

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def create(self, db: Session, obj_in: CreateSchemaType, commit: bool = True) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        self._finish(db, db_obj, commit)
        return db_obj

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
        commit: bool = True
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        self._finish(db, db_obj, commit)
        return db_obj

    def remove(self, db: Session, id: Any, commit: bool = True) -> bool:
        """Delete a row by id. Returns False when nothing matched."""
        deleted = db.query(self.model).filter(self.model.id == id).delete(
            synchronize_session=False
        )
        if commit:
            db.commit()
        return deleted > 0
