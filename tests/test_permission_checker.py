"""
Tests for the route guards called directly with decoded token data.
"""
import pytest
from fastapi import HTTPException, status

from common_utils.auth.permission_checker import PermissionChecker, SuperAdminOnly, TenantUser


def _token_data(user):
    return {
        "user_id": user.user_id,
        "tenant_id": user.tenant_id,
        "role_id": user.role_id,
        "is_super_admin": user.is_super_admin,
    }


def test_super_admin_guard_returns_token_data(test_db, super_admin):
    result = SuperAdminOnly()(user_data=_token_data(super_admin), db=test_db)

    assert result["user_id"] == super_admin.user_id
    assert result["is_super_admin"] is True


def test_super_admin_guard_refuses_tenant_user(test_db, tenant_admin):
    with pytest.raises(HTTPException) as exc:
        SuperAdminOnly()(user_data=_token_data(tenant_admin), db=test_db)

    assert exc.value.status_code == status.HTTP_403_FORBIDDEN


def test_permission_checker_reads_codes_from_the_role(test_db, tenant_admin):
    result = PermissionChecker(["Role:Create"])(user_data=_token_data(tenant_admin), db=test_db)

    assert "Role:Create" in result["permissions"]
    assert result["tenant_id"] == tenant_admin.tenant_id


def test_tenant_user_requires_listed_permission(test_db, tenant_admin):
    with pytest.raises(HTTPException) as exc:
        TenantUser(["Report:Read"])(user_data=_token_data(tenant_admin), db=test_db)

    assert exc.value.status_code == status.HTTP_403_FORBIDDEN
    assert exc.value.detail["message"] == "Insufficient permissions"
