"""
Tests for tenant roles and the plan filter on their permissions.

The tenant is subscribed to the Basic plan, which unlocks Vendor and Material.
"""
import pytest

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.models import SubscriptionStatusEnum
from app.models.iam import Role, SystemScope, TenantScope
from app.schemas.iam import DefaultRoleCreate, DefaultRoleUpdate, RoleCreate, RoleUpdate
from app.services.catalog_service import catalog_service
from app.services.plan_service import plan_service
from app.services.role_service import role_service


def _perm_ids(catalog, *codes):
    return [catalog.permissions[code].permission_id for code in codes]


class TestPlanFilter:

    def test_permissions_in_plan_pass(self, test_db, catalog, active_subscription, test_tenant):
        permissions = role_service.filter_permissions_by_plan(
            test_db, test_tenant.tenant_id, _perm_ids(catalog, "Vendor:Create", "Material:Read")
        )

        assert sorted(p.code for p in permissions) == ["Material:Read", "Vendor:Create"]

    def test_any_permission_outside_plan_rejects_all(self, test_db, catalog, active_subscription, test_tenant):
        with pytest.raises(BadRequestError) as exc:
            role_service.filter_permissions_by_plan(
                test_db, test_tenant.tenant_id, _perm_ids(catalog, "Vendor:Create", "Report:Read")
            )

        assert exc.value.error_code == "PERMISSION_NOT_IN_PLAN"
        assert exc.value.message == "1 permission(s) are not available in your plan"
        assert exc.value.details["invalid_count"] == 1
        assert exc.value.details["invalid_permission_ids"] == _perm_ids(catalog, "Report:Read")

    def test_unknown_ids_count_as_unavailable(self, test_db, catalog, active_subscription, test_tenant):
        with pytest.raises(BadRequestError) as exc:
            role_service.filter_permissions_by_plan(test_db, test_tenant.tenant_id, [99999])

        assert exc.value.details["invalid_count"] == 1

    def test_duplicate_ids_collapse(self, test_db, catalog, active_subscription, test_tenant):
        vendor_create = _perm_ids(catalog, "Vendor:Create")[0]

        permissions = role_service.filter_permissions_by_plan(test_db, test_tenant.tenant_id, [vendor_create, vendor_create])

        assert [p.permission_id for p in permissions] == [vendor_create]

    def test_no_subscription_rejects(self, test_db, catalog, test_tenant):
        with pytest.raises(BadRequestError) as exc:
            role_service.filter_permissions_by_plan(test_db, test_tenant.tenant_id, _perm_ids(catalog, "Vendor:Create"))

        assert exc.value.error_code == "NO_ACTIVE_SUBSCRIPTION"

    def test_expired_subscription_rejects(self, test_db, catalog, basic_plan, test_tenant, subscription_factory):
        subscription_factory(test_tenant, basic_plan, status=SubscriptionStatusEnum.EXPIRED)

        with pytest.raises(BadRequestError) as exc:
            role_service.filter_permissions_by_plan(test_db, test_tenant.tenant_id, _perm_ids(catalog, "Vendor:Create"))

        assert exc.value.error_code == "NO_ACTIVE_SUBSCRIPTION"

    def test_permissions_of_deleted_module_are_unavailable(self, test_db, catalog, active_subscription, test_tenant):
        catalog_service.soft_delete_module(test_db, catalog.modules["Material"].module_id)
        test_db.expire_all()

        with pytest.raises(BadRequestError):
            role_service.filter_permissions_by_plan(test_db, test_tenant.tenant_id, _perm_ids(catalog, "Material:Read"))


class TestTenantRoles:

    def test_create_with_permissions_in_plan(self, test_db, catalog, active_subscription, test_tenant):
        role = role_service.create(
            test_db,
            test_tenant.tenant_id,
            RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create")),
            user_id=11,
        )

        assert role.tenant_id == test_tenant.tenant_id
        assert role.permission_codes == ["Vendor:Create"]
        assert role.created_by == 11
        assert role.scope == TenantScope(tenant_id=test_tenant.tenant_id)

    def test_create_rejected_creates_nothing(self, test_db, catalog, active_subscription, test_tenant):
        with pytest.raises(BadRequestError) as exc:
            role_service.create(
                test_db,
                test_tenant.tenant_id,
                RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create", "Report:Read")),
            )

        assert exc.value.details["invalid_count"] == 1
        assert test_db.query(Role).filter(Role.name == "Buyer").count() == 0

    def test_create_without_permissions_skips_the_plan(self, test_db, test_tenant):
        role = role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))

        assert role.permissions == []

    def test_create_for_unknown_tenant(self, test_db):
        with pytest.raises(NotFoundError):
            role_service.create(test_db, 999, RoleCreate(name="Viewer"))

    def test_duplicate_name_in_tenant_conflicts(self, test_db, test_tenant, other_tenant):
        role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))

        with pytest.raises(ConflictError):
            role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))
        # Names are scoped per tenant
        assert role_service.create(test_db, other_tenant.tenant_id, RoleCreate(name="Viewer")).role_id

    def test_assign_replaces_permissions(self, test_db, catalog, active_subscription, test_tenant):
        role = role_service.create(
            test_db, test_tenant.tenant_id, RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create"))
        )

        role = role_service.assign_permissions(
            test_db, test_tenant.tenant_id, role.role_id, _perm_ids(catalog, "Material:Read", "Material:List"), user_id=12
        )

        assert role.permission_codes == ["Material:List", "Material:Read"]
        assert role.updated_by == 12

    def test_assign_rejected_leaves_permissions_unchanged(self, test_db, catalog, active_subscription, test_tenant):
        role = role_service.create(
            test_db, test_tenant.tenant_id, RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create"))
        )

        with pytest.raises(BadRequestError):
            role_service.assign_permissions(
                test_db, test_tenant.tenant_id, role.role_id, _perm_ids(catalog, "Vendor:Read", "Report:Read")
            )

        test_db.expire_all()
        assert role_service.get(test_db, test_tenant.tenant_id, role.role_id).permission_codes == ["Vendor:Create"]

    def test_assign_empty_list_clears(self, test_db, catalog, active_subscription, test_tenant):
        role = role_service.create(
            test_db, test_tenant.tenant_id, RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create"))
        )

        role = role_service.assign_permissions(test_db, test_tenant.tenant_id, role.role_id, [])

        assert role.permissions == []

    def test_roles_are_tenant_private(self, test_db, test_tenant, other_tenant):
        role = role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))

        with pytest.raises(NotFoundError):
            role_service.get(test_db, other_tenant.tenant_id, role.role_id)
        assert role_service.list(test_db, other_tenant.tenant_id) == []

    def test_update_and_remove(self, test_db, test_tenant):
        role = role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))

        updated = role_service.update(test_db, test_tenant.tenant_id, role.role_id, RoleUpdate(description="Read only"))
        assert updated.description == "Read only"

        role_service.remove(test_db, test_tenant.tenant_id, role.role_id, user_id=3)
        with pytest.raises(NotFoundError):
            role_service.get(test_db, test_tenant.tenant_id, role.role_id)

    def test_available_permissions_follow_the_plan(self, test_db, catalog, active_subscription, test_tenant):
        codes = [p.code for p in role_service.get_available_permissions(test_db, test_tenant.tenant_id)]

        assert len(codes) == 10
        assert all(code.split(":")[0] in ("Vendor", "Material") for code in codes)

    def test_available_permissions_empty_without_subscription(self, test_db, catalog, test_tenant):
        assert role_service.get_available_permissions(test_db, test_tenant.tenant_id) == []

    def test_deleted_plan_unlocks_nothing(self, test_db, catalog, basic_plan, active_subscription, test_tenant):
        plan_service.soft_delete(test_db, basic_plan.plan_id)

        assert role_service.get_available_permissions(test_db, test_tenant.tenant_id) == []
        with pytest.raises(BadRequestError) as exc:
            role_service.create(
                test_db, test_tenant.tenant_id, RoleCreate(name="Buyer", permission_ids=_perm_ids(catalog, "Vendor:Create"))
            )
        assert exc.value.details["invalid_count"] == 1
        assert role_service.list(test_db, test_tenant.tenant_id) == []


class TestDefaultRoles:

    def test_templates_bypass_the_plan(self, test_db, catalog):
        role = role_service.create_default(
            test_db,
            DefaultRoleCreate(name="Auditor", permission_ids=_perm_ids(catalog, "Report:Read", "Vendor:Read") + [99999]),
        )

        assert role.tenant_id is None
        assert role.scope == SystemScope()
        assert role.permission_codes == ["Report:Read", "Vendor:Read"]

    def test_update_template_permissions(self, test_db, catalog):
        role = role_service.create_default(test_db, DefaultRoleCreate(name="Auditor"))

        role = role_service.update_default(
            test_db, role.role_id, DefaultRoleUpdate(permission_ids=_perm_ids(catalog, "Report:List"), is_default=True)
        )

        assert role.permission_codes == ["Report:List"]
        assert role.is_default is True

    def test_toggle_and_delete_template(self, test_db):
        role = role_service.create_default(test_db, DefaultRoleCreate(name="Auditor"))

        assert role_service.toggle_default(test_db, role.role_id).is_active is False

        role_service.delete_default(test_db, role.role_id)
        with pytest.raises(NotFoundError):
            role_service.get_default(test_db, role.role_id)

    def test_tenant_role_is_not_a_template(self, test_db, test_tenant):
        role = role_service.create(test_db, test_tenant.tenant_id, RoleCreate(name="Viewer"))

        with pytest.raises(NotFoundError):
            role_service.get_default(test_db, role.role_id)
        assert [r.name for r in role_service.list_defaults(test_db)] == []

    def test_duplicate_template_name_conflicts(self, test_db):
        role_service.create_default(test_db, DefaultRoleCreate(name="Auditor"))

        with pytest.raises(ConflictError):
            role_service.create_default(test_db, DefaultRoleCreate(name="Auditor"))
