from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy import inspect

from app.database.session import Base
from common_utils import utcnow

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base class for CRUD operations on soft-deletable models.

    Methods only flush; the calling service owns the transaction and commits
    once the whole unit of work succeeded.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def pk(self):
        return getattr(self.model, inspect(self.model).primary_key[0].name)

    def query(self, db: Session, *, include_deleted: bool = False):
        query = db.query(self.model)
        if not include_deleted:
            query = query.filter(self.model.deleted_at.is_(None))
        return query

    def get(self, db: Session, id: Any, *, include_deleted: bool = False) -> Optional[ModelType]:
        """
        Get a live object by primary key
        """
        return self.query(db, include_deleted=include_deleted).filter(self.pk == id).first()

    def get_many(self, db: Session, ids: Iterable[Any]) -> List[ModelType]:
        """
        Get the live objects whose primary key is in ``ids``. Unknown ids are ignored.
        """
        ids = list(set(ids))
        if not ids:
            return []
        return self.query(db).filter(self.pk.in_(ids)).all()

    def get_multi(self, db: Session, *, skip: int = 0, limit: Optional[int] = None, filters: Dict = None, order_by=None) -> List[ModelType]:
        """
        Get multiple live objects with optional filters
        """
        query = self._apply_filters(self.query(db), filters)
        query = query.order_by(order_by if order_by is not None else self.pk)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], user_id: Optional[int] = None) -> ModelType:
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**obj_in_data)
        db_obj.created_by = user_id
        db_obj.updated_by = user_id
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(self, db: Session, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]], user_id: Optional[int] = None) -> ModelType:
        """
        Update the columns present in ``obj_in`` and stamp the updater
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        columns = {c.key for c in inspect(self.model).column_attrs}
        for field, value in update_data.items():
            if field in columns:
                setattr(db_obj, field, value)
        db_obj.updated_by = user_id
        db_obj.updated_at = utcnow()

        db.add(db_obj)
        db.flush()
        return db_obj

    def soft_remove(self, db: Session, *, db_obj: ModelType, user_id: Optional[int] = None) -> ModelType:
        """
        Mark an object deleted; the row stays for audit
        """
        db_obj.deleted_at = utcnow()
        db_obj.deleted_by = user_id
        db.add(db_obj)
        db.flush()
        return db_obj

    def count(self, db: Session, *, filters: Dict = None, include_deleted: bool = False) -> int:
        return self._apply_filters(self.query(db, include_deleted=include_deleted), filters).count()

    def _apply_filters(self, query, filters: Optional[Dict]):
        if filters:
            for attr, value in filters.items():
                if hasattr(self.model, attr):
                    if isinstance(value, list):
                        query = query.filter(getattr(self.model, attr).in_(value))
                    else:
                        query = query.filter(getattr(self.model, attr) == value)
        return query
