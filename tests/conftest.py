"""
Pytest configuration and fixtures for testing.
"""
import os

# Must be set before the app reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ["SUBSCRIPTION_SWEEP_ENABLED"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database.session import Base, get_db
from app.models import BillingCycleEnum, Plan, Subscription, SubscriptionStatusEnum, Tenant, User
from app.models.iam import Module, Operation, Permission, Role, build_permission_code
from common_utils import utcnow
from common_utils.auth.utils import create_access_token, hash_password
from main import app


# Test database URL - using in-memory SQLite for tests
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

MODULE_CODES = ["Vendor", "Material", "Report", "Role", "User"]
OPERATION_CODES = ["Create", "Read", "Update", "Delete", "List"]
ADMIN_PASSWORD = "Secret@123"


@pytest.fixture(scope="function")
def test_db():
    """
    Create a fresh test database for each test function.
    """
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(test_db):
    """
    Create a test client bound to the test database.
    """
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =====================================================================
# CATALOG
# =====================================================================

@pytest.fixture(scope="function")
def catalog(test_db):
    """
    Five modules crossed with the five standard operations.

    ``catalog.permissions`` is keyed by permission code, e.g. ``"Vendor:Create"``.
    """
    modules = {code: Module(code=code, name=code, is_active=True) for code in MODULE_CODES}
    operations = {code: Operation(code=code, name=code, is_active=True) for code in OPERATION_CODES}
    test_db.add_all(list(modules.values()) + list(operations.values()))
    test_db.flush()

    permissions = {}
    for module in modules.values():
        for operation in operations.values():
            code = build_permission_code(module.code, operation.code)
            permissions[code] = Permission(
                module_id=module.module_id,
                operation_id=operation.operation_id,
                code=code,
            )
    test_db.add_all(permissions.values())
    test_db.commit()

    return SimpleNamespace(modules=modules, operations=operations, permissions=permissions)


@pytest.fixture(scope="function")
def basic_plan(test_db, catalog):
    """Plan unlocking Vendor and Material only."""
    plan = Plan(
        name="Basic",
        description="Vendors and materials",
        price=Decimal("99.00"),
        billing_cycle=BillingCycleEnum.MONTHLY,
        is_active=True,
    )
    plan.modules = [catalog.modules["Vendor"], catalog.modules["Material"]]
    test_db.add(plan)
    test_db.commit()
    test_db.refresh(plan)
    return plan


# =====================================================================
# TENANTS & SUBSCRIPTIONS
# =====================================================================

@pytest.fixture(scope="function")
def test_tenant(test_db):
    tenant = Tenant(company_name="Acme Metals", email="contact@acme.com", is_active=True)
    test_db.add(tenant)
    test_db.commit()
    test_db.refresh(tenant)
    return tenant


@pytest.fixture(scope="function")
def other_tenant(test_db):
    tenant = Tenant(company_name="Globex Recycling", email="contact@globex.com", is_active=True)
    test_db.add(tenant)
    test_db.commit()
    test_db.refresh(tenant)
    return tenant


def make_subscription(db, tenant, plan, *, days_left=30, status=SubscriptionStatusEnum.ACTIVE):
    now = utcnow()
    subscription = Subscription(
        tenant_id=tenant.tenant_id,
        plan_id=plan.plan_id,
        start_date=now - timedelta(days=10),
        end_date=now + timedelta(days=days_left),
        status=status,
    )
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    return subscription


@pytest.fixture(scope="function")
def active_subscription(test_db, test_tenant, basic_plan):
    return make_subscription(test_db, test_tenant, basic_plan)


# =====================================================================
# USERS & TOKENS
# =====================================================================

@pytest.fixture(scope="function")
def super_admin(test_db):
    user = User(
        name="Super Admin",
        email="root@acme.com",
        password=hash_password(ADMIN_PASSWORD),
        is_super_admin=True,
        is_active=True,
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture(scope="function")
def tenant_admin_role(test_db, test_tenant, catalog):
    """Tenant role holding every Role:* and User:* permission, created without a plan check."""
    role = Role(tenant_id=test_tenant.tenant_id, name="Tenant Admin", is_default=True, is_active=True)
    role.permissions = [p for code, p in catalog.permissions.items() if code.split(":")[0] in ("Role", "User")]
    test_db.add(role)
    test_db.commit()
    test_db.refresh(role)
    return role


@pytest.fixture(scope="function")
def tenant_admin(test_db, test_tenant, tenant_admin_role):
    user = User(
        name="Asha Rao",
        email="asha@acme.com",
        password=hash_password(ADMIN_PASSWORD),
        tenant_id=test_tenant.tenant_id,
        role_id=tenant_admin_role.role_id,
        is_super_admin=False,
        is_active=True,
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


def token_for(user):
    return create_access_token(
        user_id=user.user_id,
        tenant_id=user.tenant_id,
        role_id=user.role_id,
        is_super_admin=user.is_super_admin,
    )


@pytest.fixture(scope="function")
def super_admin_headers(super_admin):
    return {"Authorization": f"Bearer {token_for(super_admin)}"}


@pytest.fixture(scope="function")
def tenant_admin_headers(tenant_admin):
    return {"Authorization": f"Bearer {token_for(tenant_admin)}"}


@pytest.fixture(scope="function")
def subscription_factory(test_db):
    """``subscription_factory(tenant, plan, days_left=30, status=ACTIVE)``"""
    def factory(tenant, plan, **kwargs):
        return make_subscription(test_db, tenant, plan, **kwargs)
    return factory
