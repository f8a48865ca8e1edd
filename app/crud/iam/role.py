from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from app.models.iam import Role, Permission
from app.schemas.iam import RoleCreate, RoleUpdate
from app.crud.base import CRUDBase


class CRUDRole(CRUDBase[Role, RoleCreate, RoleUpdate]):

    def create_with_permissions(
        self, db: Session, *, obj_in: dict, permissions: Sequence[Permission], user_id: Optional[int] = None
    ) -> Role:
        db_obj = self.create(db, obj_in=obj_in, user_id=user_id)
        db_obj.permissions = list(permissions)
        db.flush()
        return db_obj

    def set_permissions(
        self, db: Session, *, db_obj: Role, permissions: Sequence[Permission], user_id: Optional[int] = None
    ) -> Role:
        db_obj.permissions = list(permissions)
        return self.update(db, db_obj=db_obj, obj_in={}, user_id=user_id)

    def get_for_tenant(self, db: Session, *, tenant_id: int, role_id: int) -> Optional[Role]:
        return self.query(db).filter(Role.role_id == role_id, Role.tenant_id == tenant_id).first()

    def get_by_tenant(self, db: Session, *, tenant_id: int) -> List[Role]:
        return self.query(db).filter(Role.tenant_id == tenant_id).order_by(Role.name).all()

    def get_default(self, db: Session, *, role_id: int) -> Optional[Role]:
        return self.query(db).filter(Role.role_id == role_id, Role.tenant_id.is_(None)).first()

    def get_by_name(self, db: Session, *, name: str, tenant_id: Optional[int] = None) -> Optional[Role]:
        """Live role with this name in the tenant, or among system roles when tenant_id is None"""
        query = self.query(db).filter(Role.name == name)
        if tenant_id is None:
            return query.filter(Role.tenant_id.is_(None)).first()
        return query.filter(Role.tenant_id == tenant_id).first()

    def get_defaults(self, db: Session) -> List[Role]:
        return self.query(db).filter(Role.tenant_id.is_(None)).order_by(Role.name).all()


role_crud = CRUDRole(Role)
