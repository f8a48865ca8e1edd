from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import get_logger
from app.crud.iam import role_crud
from app.crud.tenant import tenant_crud
from app.crud.user import user_crud
from app.database.session import transaction
from app.models import Tenant, User
from app.schemas.tenant import TenantCreate, TenantUpdate
from common_utils.auth.utils import hash_password

logger = get_logger(__name__)

TENANT_ADMIN_ROLE = "Tenant Admin"


class TenantService:

    def list(self, db: Session) -> List[Tenant]:
        return tenant_crud.get_multi(db, order_by=Tenant.created_at.desc())

    def get(self, db: Session, tenant_id: int) -> Tenant:
        tenant = tenant_crud.get(db, tenant_id)
        if not tenant:
            raise NotFoundError(f"Tenant with ID {tenant_id} not found")
        return tenant

    def create(self, db: Session, obj_in: TenantCreate, user_id: Optional[int] = None) -> Tuple[Tenant, User]:
        """
        Onboard a tenant: the tenant row, its "Tenant Admin" role and the admin user.

        The role starts with the permissions of the system "Tenant Admin"
        template; it is copied as is, without a plan check, since the tenant
        has no subscription yet.
        """
        with transaction(db):
            if tenant_crud.get_by_email(db, email=obj_in.email):
                raise ConflictError("Tenant with this email already exists")
            if user_crud.email_taken(db, email=obj_in.admin_email):
                raise ConflictError("User with this email already exists")

            tenant = tenant_crud.create(
                db,
                obj_in=obj_in.model_dump(include={"company_name", "email", "phone", "address", "external_db_config"}),
                user_id=user_id,
            )

            template = role_crud.get_by_name(db, name=TENANT_ADMIN_ROLE)
            admin_role = role_crud.create_with_permissions(
                db,
                obj_in={
                    "tenant_id": tenant.tenant_id,
                    "name": TENANT_ADMIN_ROLE,
                    "description": "Tenant administrator with full access",
                    "is_default": True,
                    "is_active": True,
                },
                permissions=template.permissions if template else [],
                user_id=user_id,
            )
            if template is None:
                logger.warning(f"No '{TENANT_ADMIN_ROLE}' template found; tenant {tenant.tenant_id} admin role starts empty")

            admin = user_crud.create(
                db,
                obj_in={
                    "name": obj_in.admin_name,
                    "email": obj_in.admin_email,
                    "password": hash_password(obj_in.admin_password),
                    "tenant_id": tenant.tenant_id,
                    "role_id": admin_role.role_id,
                    "is_super_admin": False,
                    "is_active": True,
                },
                user_id=user_id,
            )
        db.refresh(tenant)
        db.refresh(admin)
        logger.info(f"Tenant created: id={tenant.tenant_id}, admin_user={admin.user_id}, role={admin_role.role_id}")
        return tenant, admin

    def update(self, db: Session, tenant_id: int, obj_in: TenantUpdate, user_id: Optional[int] = None) -> Tenant:
        with transaction(db):
            tenant = self.get(db, tenant_id)
            if obj_in.email and obj_in.email != tenant.email and tenant_crud.get_by_email(db, email=obj_in.email):
                raise ConflictError("Tenant with this email already exists")
            tenant = tenant_crud.update(db, db_obj=tenant, obj_in=obj_in, user_id=user_id)
        db.refresh(tenant)
        logger.info(f"Tenant {tenant_id} updated")
        return tenant

    def toggle_active(self, db: Session, tenant_id: int, user_id: Optional[int] = None) -> Tenant:
        with transaction(db):
            tenant = self.get(db, tenant_id)
            tenant_crud.update(db, db_obj=tenant, obj_in={"is_active": not tenant.is_active}, user_id=user_id)
        db.refresh(tenant)
        logger.info(f"Tenant {tenant_id} is_active -> {tenant.is_active}")
        return tenant

    def soft_delete(self, db: Session, tenant_id: int, user_id: Optional[int] = None) -> Tenant:
        with transaction(db):
            tenant = self.get(db, tenant_id)
            tenant_crud.soft_remove(db, db_obj=tenant, user_id=user_id)
        logger.info(f"Tenant {tenant_id} deleted")
        return tenant


tenant_service = TenantService()
