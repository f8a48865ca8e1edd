"""
Tests for tenant onboarding and lifecycle.
"""
import pytest

from app.core.exceptions import ConflictError, NotFoundError
from app.models import User
from app.models.iam import Role
from app.schemas.tenant import TenantCreate, TenantUpdate
from app.services.role_service import role_service
from app.services.tenant_service import tenant_service
from app.schemas.iam import DefaultRoleCreate
from common_utils.auth.utils import verify_password


def _tenant_in(**overrides):
    data = {
        "company_name": "Initech Scrap",
        "email": "office@initech.com",
        "phone": "+911234567890",
        "admin_name": "Peter Gibbons",
        "admin_email": "peter@initech.com",
        "admin_password": "Secret@123",
    }
    data.update(overrides)
    return TenantCreate(**data)


def test_create_tenant_with_admin(test_db, catalog):
    template = role_service.create_default(
        test_db,
        DefaultRoleCreate(name="Tenant Admin", permission_ids=[p.permission_id for p in catalog.permissions.values()]),
    )

    tenant, admin = tenant_service.create(test_db, _tenant_in(), user_id=1)

    assert tenant.tenant_id is not None
    assert tenant.created_by == 1
    assert admin.tenant_id == tenant.tenant_id
    assert admin.is_super_admin is False
    assert verify_password("Secret@123", admin.password)

    role = test_db.get(Role, admin.role_id)
    assert role.tenant_id == tenant.tenant_id
    assert role.name == "Tenant Admin"
    assert role.permission_codes == template.permission_codes


def test_create_tenant_without_template_starts_empty(test_db):
    _, admin = tenant_service.create(test_db, _tenant_in())

    assert test_db.get(Role, admin.role_id).permissions == []


def test_duplicate_tenant_email(test_db, test_tenant):
    with pytest.raises(ConflictError) as exc:
        tenant_service.create(test_db, _tenant_in(email=test_tenant.email))
    assert exc.value.message == "Tenant with this email already exists"


def test_duplicate_admin_email_rolls_back(test_db, super_admin):
    with pytest.raises(ConflictError) as exc:
        tenant_service.create(test_db, _tenant_in(admin_email=super_admin.email))

    assert exc.value.message == "User with this email already exists"
    assert tenant_service.list(test_db) == []
    assert test_db.query(User).count() == 1


def test_update_toggle_and_delete(test_db, test_tenant, other_tenant):
    updated = tenant_service.update(test_db, test_tenant.tenant_id, TenantUpdate(address="Plot 9"), user_id=2)
    assert updated.address == "Plot 9"
    assert updated.updated_by == 2

    with pytest.raises(ConflictError):
        tenant_service.update(test_db, test_tenant.tenant_id, TenantUpdate(email=other_tenant.email))

    assert tenant_service.toggle_active(test_db, test_tenant.tenant_id).is_active is False

    tenant_service.soft_delete(test_db, test_tenant.tenant_id, user_id=2)
    with pytest.raises(NotFoundError):
        tenant_service.get(test_db, test_tenant.tenant_id)


def test_external_db_config_is_stored(test_db, test_tenant):
    config = {"host": "db.acme.internal", "port": 5432, "database": "acme"}

    tenant = tenant_service.update(test_db, test_tenant.tenant_id, TenantUpdate(external_db_config=config))

    assert tenant.external_db_config == config
