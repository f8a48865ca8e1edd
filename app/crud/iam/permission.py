from typing import Collection, List, Optional
from sqlalchemy.orm import Session
from pydantic import BaseModel
from app.models.iam import Permission
from app.crud.base import CRUDBase
from common_utils import utcnow


class CRUDPermission(CRUDBase[Permission, BaseModel, BaseModel]):
    def get_all(self, db: Session) -> List[Permission]:
        return self.get_multi(db, order_by=Permission.code)

    def get_by_modules(self, db: Session, *, module_ids: Collection[int]) -> List[Permission]:
        if not module_ids:
            return []
        return (
            self.query(db)
            .filter(Permission.module_id.in_(list(module_ids)))
            .order_by(Permission.code)
            .all()
        )

    def soft_remove_by_module(self, db: Session, *, module_id: int, user_id: Optional[int] = None) -> int:
        return self._soft_remove_where(db, Permission.module_id == module_id, user_id)

    def soft_remove_by_operation(self, db: Session, *, operation_id: int, user_id: Optional[int] = None) -> int:
        return self._soft_remove_where(db, Permission.operation_id == operation_id, user_id)

    def _soft_remove_where(self, db: Session, criterion, user_id: Optional[int]) -> int:
        return (
            self.query(db)
            .filter(criterion)
            .update({"deleted_at": utcnow(), "deleted_by": user_id}, synchronize_session="fetch")
        )


permission_crud = CRUDPermission(Permission)
