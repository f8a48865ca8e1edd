"""
Role and permission authority.

Tenant roles may only hold permissions whose module is unlocked by the
tenant's currently valid subscription plan. The check runs on every write
(create, assign) and rejects the whole request when any requested id fails
it. System template roles are not bound to a plan and skip the check.
"""
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.logging_config import get_logger
from app.crud.iam import permission_crud, role_crud
from app.crud.plan import plan_crud
from app.crud.tenant import tenant_crud
from app.database.session import transaction
from app.models import Subscription
from app.models.iam import Permission, Role, RoleScope, SystemScope, TenantScope
from app.schemas.iam import DefaultRoleCreate, DefaultRoleUpdate, RoleCreate, RoleUpdate
from app.services.subscription_service import subscription_service

logger = get_logger(__name__)


class RoleService:

    # ------------------------------------------------------------------
    # Plan filter
    # ------------------------------------------------------------------
    def filter_permissions_by_plan(self, db: Session, tenant_id: int, permission_ids: Iterable[int]) -> List[Permission]:
        """
        Resolve ``permission_ids`` for a tenant role, all or nothing.

        Unknown ids count as not available. Duplicate ids are collapsed first.

        Raises:
            BadRequestError: the tenant has no valid subscription, or at least
                one id is not in the subscription plan's modules
        """
        requested = list(dict.fromkeys(permission_ids))

        subscription = subscription_service.get_valid_subscription(db, tenant_id)
        if subscription is None:
            logger.warning(f"Permission assignment refused: tenant {tenant_id} has no active subscription")
            raise BadRequestError(
                "Tenant does not have an active subscription",
                error_code="NO_ACTIVE_SUBSCRIPTION",
            )

        plan_module_ids = self._plan_module_ids(db, subscription)
        candidates = permission_crud.get_many(db, requested)
        valid = [p for p in candidates if p.module_id in plan_module_ids]

        invalid_count = len(requested) - len(valid)
        if invalid_count:
            valid_ids = {p.permission_id for p in valid}
            invalid_ids = [pid for pid in requested if pid not in valid_ids]
            logger.warning(
                f"Permission assignment refused for tenant {tenant_id}: "
                f"{invalid_ids} outside plan {subscription.plan_id}"
            )
            raise BadRequestError(
                f"{invalid_count} permission(s) are not available in your plan",
                error_code="PERMISSION_NOT_IN_PLAN",
                details={"invalid_count": invalid_count, "invalid_permission_ids": invalid_ids},
            )
        return valid

    def _plan_module_ids(self, db: Session, subscription: Subscription) -> Set[int]:
        # A soft-deleted plan unlocks nothing
        plan = plan_crud.get(db, subscription.plan_id)
        return plan.module_ids if plan else set()

    def _resolve_permissions(self, db: Session, scope: RoleScope, permission_ids: Iterable[int]) -> List[Permission]:
        if isinstance(scope, SystemScope):
            # Templates: plain lookup, unknown ids dropped
            return permission_crud.get_many(db, permission_ids)
        return self.filter_permissions_by_plan(db, scope.tenant_id, permission_ids)

    def _ensure_unique_name(self, db: Session, name: str, tenant_id: Optional[int], exclude_role_id: Optional[int] = None):
        existing = role_crud.get_by_name(db, name=name, tenant_id=tenant_id)
        if existing and existing.role_id != exclude_role_id:
            raise ConflictError(f"Role '{name}' already exists")

    # ------------------------------------------------------------------
    # Tenant roles
    # ------------------------------------------------------------------
    def list(self, db: Session, tenant_id: int) -> List[Role]:
        return role_crud.get_by_tenant(db, tenant_id=tenant_id)

    def get(self, db: Session, tenant_id: int, role_id: int) -> Role:
        role = role_crud.get_for_tenant(db, tenant_id=tenant_id, role_id=role_id)
        if not role:
            raise NotFoundError(f"Role with ID {role_id} not found")
        return role

    def create(self, db: Session, tenant_id: int, obj_in: RoleCreate, user_id: Optional[int] = None) -> Role:
        scope = TenantScope(tenant_id=tenant_id)
        with transaction(db):
            if not tenant_crud.get(db, tenant_id):
                raise NotFoundError(f"Tenant with ID {tenant_id} not found")
            self._ensure_unique_name(db, obj_in.name, tenant_id)

            permissions = []
            if obj_in.permission_ids:
                permissions = self._resolve_permissions(db, scope, obj_in.permission_ids)

            role = role_crud.create_with_permissions(
                db,
                obj_in={"tenant_id": tenant_id, "name": obj_in.name, "description": obj_in.description},
                permissions=permissions,
                user_id=user_id,
            )
        db.refresh(role)
        logger.info(f"Role created: id={role.role_id}, tenant={tenant_id}, permissions={role.permission_codes}")
        return role

    def assign_permissions(self, db: Session, tenant_id: int, role_id: int, permission_ids: Iterable[int], user_id: Optional[int] = None) -> Role:
        """Replace the role's permission set; on rejection the stored set is untouched."""
        with transaction(db):
            role = self.get(db, tenant_id, role_id)
            permissions = self._resolve_permissions(db, role.scope, permission_ids)
            role_crud.set_permissions(db, db_obj=role, permissions=permissions, user_id=user_id)
        db.refresh(role)
        logger.info(f"Role {role_id} permissions set to {role.permission_codes}")
        return role

    def update(self, db: Session, tenant_id: int, role_id: int, obj_in: RoleUpdate, user_id: Optional[int] = None) -> Role:
        with transaction(db):
            role = self.get(db, tenant_id, role_id)
            if obj_in.name is not None and obj_in.name != role.name:
                self._ensure_unique_name(db, obj_in.name, tenant_id, exclude_role_id=role_id)
            role = role_crud.update(db, db_obj=role, obj_in=obj_in, user_id=user_id)
        db.refresh(role)
        logger.info(f"Role {role_id} updated")
        return role

    def remove(self, db: Session, tenant_id: int, role_id: int, user_id: Optional[int] = None) -> Role:
        with transaction(db):
            role = self.get(db, tenant_id, role_id)
            role_crud.soft_remove(db, db_obj=role, user_id=user_id)
        logger.info(f"Role {role_id} of tenant {tenant_id} deleted")
        return role

    def get_available_permissions(self, db: Session, tenant_id: int) -> List[Permission]:
        subscription = subscription_service.get_valid_subscription(db, tenant_id)
        if subscription is None:
            return []
        return permission_crud.get_by_modules(db, module_ids=self._plan_module_ids(db, subscription))

    # ------------------------------------------------------------------
    # System template roles
    # ------------------------------------------------------------------
    def list_defaults(self, db: Session) -> List[Role]:
        return role_crud.get_defaults(db)

    def get_default(self, db: Session, role_id: int) -> Role:
        role = role_crud.get_default(db, role_id=role_id)
        if not role:
            raise NotFoundError(f"Default role with ID {role_id} not found")
        return role

    def create_default(self, db: Session, obj_in: DefaultRoleCreate, user_id: Optional[int] = None) -> Role:
        with transaction(db):
            self._ensure_unique_name(db, obj_in.name, None)
            permissions = self._resolve_permissions(db, SystemScope(), obj_in.permission_ids)
            role = role_crud.create_with_permissions(
                db,
                obj_in=obj_in.model_dump(exclude={"permission_ids"}),
                permissions=permissions,
                user_id=user_id,
            )
        db.refresh(role)
        logger.info(f"Default role created: id={role.role_id}, name={role.name}")
        return role

    def update_default(self, db: Session, role_id: int, obj_in: DefaultRoleUpdate, user_id: Optional[int] = None) -> Role:
        update_data = obj_in.model_dump(exclude_unset=True)
        permission_ids = update_data.pop("permission_ids", None)
        with transaction(db):
            role = self.get_default(db, role_id)
            if update_data.get("name") and update_data["name"] != role.name:
                self._ensure_unique_name(db, update_data["name"], None, exclude_role_id=role_id)
            role_crud.update(db, db_obj=role, obj_in=update_data, user_id=user_id)
            if permission_ids is not None:
                role_crud.set_permissions(
                    db, db_obj=role,
                    permissions=self._resolve_permissions(db, role.scope, permission_ids),
                    user_id=user_id,
                )
        db.refresh(role)
        logger.info(f"Default role {role_id} updated")
        return role

    def toggle_default(self, db: Session, role_id: int, user_id: Optional[int] = None) -> Role:
        with transaction(db):
            role = self.get_default(db, role_id)
            role_crud.update(db, db_obj=role, obj_in={"is_active": not role.is_active}, user_id=user_id)
        db.refresh(role)
        logger.info(f"Default role {role_id} is_active -> {role.is_active}")
        return role

    def delete_default(self, db: Session, role_id: int, user_id: Optional[int] = None) -> Role:
        with transaction(db):
            role = self.get_default(db, role_id)
            role_crud.soft_remove(db, db_obj=role, user_id=user_id)
        logger.info(f"Default role {role_id} deleted")
        return role


role_service = RoleService()
