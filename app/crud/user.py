from typing import List, Optional
from sqlalchemy.orm import Session
from app.models import User
from app.schemas.user import UserCreate, UserUpdate
from app.crud.base import CRUDBase


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return self.query(db).filter(User.email == email).first()

    def email_taken(self, db: Session, *, email: str) -> bool:
        # The unique index also covers soft-deleted rows
        return self.query(db, include_deleted=True).filter(User.email == email).first() is not None

    def get_by_tenant(self, db: Session, *, tenant_id: int) -> List[User]:
        return self.query(db).filter(User.tenant_id == tenant_id).order_by(User.user_id).all()

    def get_super_admins(self, db: Session) -> List[User]:
        return self.query(db).filter(User.is_super_admin.is_(True)).order_by(User.user_id).all()


user_crud = CRUDUser(User)
