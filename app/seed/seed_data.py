"""
Idempotent bootstrap of the RBAC catalog.

Each step creates what is missing, counts what already exists and never
renames existing rows. Steps only flush; ``seed_all`` and
``migrate_permissions`` run them inside one transaction.
"""
from decimal import Decimal
from typing import Dict, Tuple

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.config import settings
from app.core.logging_config import get_logger
from app.database.session import transaction
from app.models import BillingCycleEnum, Plan, User, plan_module
from app.models.iam import Module, Operation, Permission, Role, build_permission_code, role_permission
from app.seed.catalog import (
    DEFAULT_PLANS,
    DEFAULT_ROLES,
    MODULE_DEFINITIONS,
    OPERATION_DEFINITIONS,
    current_module_code,
    operations_for_module,
)
from common_utils.auth.utils import hash_password

logger = get_logger(__name__)


def _live(db: Session, model):
    return db.query(model).filter(model.deleted_at.is_(None))


def seed_super_admin(db: Session) -> str:
    email = settings.SUPER_ADMIN_EMAIL
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.info(f"Super admin {email} already exists, skipping.")
        return f"Super admin already exists (ID: {existing.user_id})"

    user = User(
        name="Super Admin",
        email=email,
        password=hash_password(settings.SUPER_ADMIN_PASSWORD),
        is_super_admin=True,
        is_active=True,
    )
    db.add(user)
    db.flush()
    logger.info(f"Super admin {email} created.")
    return f"Created super admin (ID: {user.user_id}, Email: {email})"


def seed_modules(db: Session) -> Tuple[int, int]:
    created = existing = 0
    for code, (name, description) in MODULE_DEFINITIONS.items():
        if _live(db, Module).filter(Module.code == code).first():
            existing += 1
            continue
        db.add(Module(code=code, name=name, description=description, is_active=True))
        created += 1
    db.flush()
    logger.info(f"Modules: {created} created, {existing} already existed")
    return created, existing


def seed_operations(db: Session) -> Tuple[int, int]:
    created = existing = 0
    for code, name in OPERATION_DEFINITIONS.items():
        if _live(db, Operation).filter(Operation.code == code).first():
            existing += 1
            continue
        db.add(Operation(code=code, name=name, is_active=True))
        created += 1
    db.flush()
    logger.info(f"Operations: {created} created, {existing} already existed")
    return created, existing


def seed_permissions(db: Session) -> Tuple[int, int]:
    """One permission per module and each operation on that module's whitelist."""
    created = existing = 0
    operations = {op.code: op for op in _live(db, Operation).all()}

    for module in _live(db, Module).order_by(Module.code).all():
        for op_code in operations_for_module(module.code):
            operation = operations.get(op_code)
            if operation is None:
                logger.warning(f"Operation {op_code} missing, no permission for {module.code}")
                continue
            code = build_permission_code(module.code, operation.code)
            if _live(db, Permission).filter(Permission.code == code).first():
                existing += 1
                continue
            db.add(Permission(module_id=module.module_id, operation_id=operation.operation_id, code=code))
            created += 1
    db.flush()
    logger.info(f"Permissions: {created} created, {existing} already existed")
    return created, existing


def seed_default_roles(db: Session) -> str:
    """System template roles holding every permission."""
    all_permissions = _live(db, Permission).all()
    results = []
    for name, description in DEFAULT_ROLES:
        role = _live(db, Role).filter(Role.name == name, Role.tenant_id.is_(None)).first()
        if role:
            logger.info(f"Default role {name} already exists, skipping.")
            results.append(f"{name} Role: already exists (ID: {role.role_id})")
            continue
        role = Role(name=name, description=description, is_default=True, is_active=True, tenant_id=None)
        role.permissions = list(all_permissions)
        db.add(role)
        db.flush()
        logger.info(f"Default role {name} created with {len(all_permissions)} permissions.")
        results.append(f"{name} Role: created (ID: {role.role_id}) with {len(all_permissions)} permissions")
    return "; ".join(results)


def seed_plans(db: Session) -> Tuple[int, int]:
    created = existing = 0
    for data in DEFAULT_PLANS:
        if _live(db, Plan).filter(Plan.name == data["name"]).first():
            existing += 1
            continue
        plan = Plan(
            name=data["name"],
            description=data["description"],
            price=Decimal(data["price"]),
            billing_cycle=BillingCycleEnum(data["billing_cycle"]),
            is_active=True,
        )
        plan.modules = _live(db, Module).filter(Module.code.in_(data["module_codes"])).all()
        db.add(plan)
        created += 1
    db.flush()
    logger.info(f"Plans: {created} created, {existing} already existed")
    return created, existing


def _counts(label: str, counts: Tuple[int, int]) -> str:
    return f"{label}: {counts[0]} created, {counts[1]} already existed"


def seed_all(db: Session) -> Dict:
    """Super admin, modules, operations, permissions, default roles and plans, in that order."""
    with transaction(db):
        details = {
            "super_admin": seed_super_admin(db),
            "modules": _counts("Modules", seed_modules(db)),
            "operations": _counts("Operations", seed_operations(db)),
            "permissions": _counts("Permissions", seed_permissions(db)),
            "default_roles": seed_default_roles(db),
            "plans": _counts("Plans", seed_plans(db)),
        }
    logger.info("Seeding completed successfully.")
    return {"message": "Seeding completed successfully", "details": details}


def migrate_permissions(db: Session) -> Dict:
    """
    Rebuild the catalog under the current code convention.

    Hard-deletes every permission, operation and module together with the
    role and plan links, seeds them again, maps each plan's old module codes
    onto the new ones and gives every live role the full permission set.
    Meant for one-off format migrations.
    """
    with transaction(db):
        plans = _live(db, Plan).all()
        plan_codes = {plan.plan_id: {current_module_code(m.code) for m in plan.modules} for plan in plans}
        role_ids = [role_id for (role_id,) in _live(db, Role).with_entities(Role.role_id).all()]

        removed = {
            "role_permissions": db.execute(delete(role_permission)).rowcount,
            "plan_modules": db.execute(delete(plan_module)).rowcount,
            "permissions": db.execute(delete(Permission.__table__)).rowcount,
            "operations": db.execute(delete(Operation.__table__)).rowcount,
            "modules": db.execute(delete(Module.__table__)).rowcount,
        }
        db.expire_all()
        logger.warning(f"Catalog wiped for migration: {removed}")

        modules = seed_modules(db)
        operations = seed_operations(db)
        permissions = seed_permissions(db)

        for plan in plans:
            codes = plan_codes[plan.plan_id]
            plan.modules = _live(db, Module).filter(Module.code.in_(codes)).all() if codes else []
        db.flush()

        all_permissions = _live(db, Permission).all()
        for role in db.query(Role).filter(Role.role_id.in_(role_ids)).all():
            role.permissions = list(all_permissions)
        db.flush()

    logger.info(f"Permission migration completed: {len(role_ids)} role(s) reassigned")
    return {
        "message": "Permission migration completed successfully",
        "details": {
            "removed": removed,
            "modules": _counts("Modules", modules),
            "operations": _counts("Operations", operations),
            "permissions": _counts("Permissions", permissions),
            "plans_remapped": len(plans),
            "roles_reassigned": len(role_ids),
        },
    }
