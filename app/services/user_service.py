from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.logging_config import get_logger
from app.crud.iam import role_crud
from app.crud.user import user_crud
from app.database.session import transaction
from app.models import User
from app.schemas.user import SuperAdminCreate, UserCreate, UserUpdate
from common_utils.auth.utils import hash_password, verify_password

logger = get_logger(__name__)


class UserService:

    def _ensure_email_free(self, db: Session, email: str):
        if user_crud.email_taken(db, email=email):
            raise ConflictError("Email already exists")

    # ------------------------------------------------------------------
    # Super admins
    # ------------------------------------------------------------------
    def create_super_admin(self, db: Session, obj_in: SuperAdminCreate, user_id: Optional[int] = None) -> User:
        with transaction(db):
            self._ensure_email_free(db, obj_in.email)
            user = user_crud.create(
                db,
                obj_in={
                    "name": obj_in.name,
                    "email": obj_in.email,
                    "password": hash_password(obj_in.password),
                    "is_super_admin": True,
                    "is_active": True,
                },
                user_id=user_id,
            )
        db.refresh(user)
        logger.info(f"Super admin created: id={user.user_id}")
        return user

    def list_super_admins(self, db: Session) -> List[User]:
        return user_crud.get_super_admins(db)

    def get_super_admin(self, db: Session, target_id: int) -> User:
        user = user_crud.get(db, target_id)
        if not user or not user.is_super_admin:
            raise NotFoundError(f"Super admin with ID {target_id} not found")
        return user

    def update_super_admin(self, db: Session, target_id: int, obj_in: UserUpdate, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_super_admin(db, target_id)
            if obj_in.email and obj_in.email != user.email:
                self._ensure_email_free(db, obj_in.email)
            user = user_crud.update(db, db_obj=user, obj_in=obj_in, user_id=user_id)
        db.refresh(user)
        return user

    def remove_super_admin(self, db: Session, target_id: int, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_super_admin(db, target_id)
            user_crud.soft_remove(db, db_obj=user, user_id=user_id)
        logger.info(f"Super admin {target_id} deleted")
        return user

    # ------------------------------------------------------------------
    # Tenant users
    # ------------------------------------------------------------------
    def _tenant_role(self, db: Session, tenant_id: int, role_id: int):
        role = role_crud.get_for_tenant(db, tenant_id=tenant_id, role_id=role_id)
        if not role:
            raise NotFoundError(f"Role with ID {role_id} not found")
        return role

    def create_tenant_user(self, db: Session, tenant_id: int, obj_in: UserCreate, user_id: Optional[int] = None) -> User:
        with transaction(db):
            self._ensure_email_free(db, obj_in.email)
            self._tenant_role(db, tenant_id, obj_in.role_id)
            user = user_crud.create(
                db,
                obj_in={
                    "tenant_id": tenant_id,
                    "name": obj_in.name,
                    "email": obj_in.email,
                    "password": hash_password(obj_in.password),
                    "role_id": obj_in.role_id,
                    "is_super_admin": False,
                    "is_active": True,
                },
                user_id=user_id,
            )
        db.refresh(user)
        logger.info(f"User created: id={user.user_id}, tenant={tenant_id}, role={obj_in.role_id}")
        return user

    def list_tenant_users(self, db: Session, tenant_id: int) -> List[User]:
        return user_crud.get_by_tenant(db, tenant_id=tenant_id)

    def get_tenant_user(self, db: Session, tenant_id: int, target_id: int) -> User:
        user = user_crud.get(db, target_id)
        if not user or user.tenant_id != tenant_id or user.is_super_admin:
            raise NotFoundError(f"User with ID {target_id} not found")
        return user

    def update_tenant_user(self, db: Session, tenant_id: int, target_id: int, obj_in: UserUpdate, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_tenant_user(db, tenant_id, target_id)
            if obj_in.email and obj_in.email != user.email:
                self._ensure_email_free(db, obj_in.email)
            user = user_crud.update(db, db_obj=user, obj_in=obj_in, user_id=user_id)
        db.refresh(user)
        return user

    def update_user_role(self, db: Session, tenant_id: int, target_id: int, role_id: int, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_tenant_user(db, tenant_id, target_id)
            self._tenant_role(db, tenant_id, role_id)
            user = user_crud.update(db, db_obj=user, obj_in={"role_id": role_id}, user_id=user_id)
        db.refresh(user)
        logger.info(f"User {target_id} moved to role {role_id}")
        return user

    def toggle_tenant_user(self, db: Session, tenant_id: int, target_id: int, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_tenant_user(db, tenant_id, target_id)
            user_crud.update(db, db_obj=user, obj_in={"is_active": not user.is_active}, user_id=user_id)
        db.refresh(user)
        logger.info(f"User {target_id} is_active -> {user.is_active}")
        return user

    def remove_tenant_user(self, db: Session, tenant_id: int, target_id: int, user_id: Optional[int] = None) -> User:
        with transaction(db):
            user = self.get_tenant_user(db, tenant_id, target_id)
            user_crud.soft_remove(db, db_obj=user, user_id=user_id)
        logger.info(f"User {target_id} of tenant {tenant_id} deleted")
        return user

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------
    def change_password(self, db: Session, user_id: int, current_password: str, new_password: str) -> None:
        with transaction(db):
            user = user_crud.get(db, user_id)
            if not user:
                raise NotFoundError("User not found")
            if not verify_password(current_password, user.password):
                raise BadRequestError("Current password is incorrect")
            user_crud.update(db, db_obj=user, obj_in={"password": hash_password(new_password)}, user_id=user_id)
        logger.info(f"User {user_id} changed password")

    def reset_password(self, db: Session, tenant_id: Optional[int], target_id: int, new_password: str, user_id: Optional[int] = None) -> None:
        """Set a new password for a tenant user, or for a super admin when tenant_id is None."""
        with transaction(db):
            if tenant_id is None:
                user = self.get_super_admin(db, target_id)
            else:
                user = self.get_tenant_user(db, tenant_id, target_id)
            user_crud.update(db, db_obj=user, obj_in={"password": hash_password(new_password)}, user_id=user_id)
        logger.info(f"Password reset for user {target_id} by {user_id}")


user_service = UserService()
