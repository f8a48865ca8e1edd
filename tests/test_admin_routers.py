"""
Tests for the super-admin surface: catalog, plans, subscriptions, tenants and the seeder.
"""
from datetime import timedelta

from fastapi import status

from common_utils import utcnow

API = "/api/v1"


class TestCatalogRoutes:

    def test_module_lifecycle(self, client, super_admin_headers):
        created = client.post(f"{API}/iam/modules/", json={"code": "Vendor", "name": "Vendors"}, headers=super_admin_headers)
        assert created.status_code == status.HTTP_201_CREATED
        module_id = created.json()["data"]["module_id"]

        duplicate = client.post(f"{API}/iam/modules/", json={"code": "Vendor", "name": "Again"}, headers=super_admin_headers)
        assert duplicate.status_code == status.HTTP_409_CONFLICT
        assert duplicate.json()["detail"]["message"] == "Module with code 'Vendor' already exists"

        toggled = client.patch(f"{API}/iam/modules/{module_id}/toggle-status", headers=super_admin_headers)
        assert toggled.json()["data"]["is_active"] is False

        deleted = client.delete(f"{API}/iam/modules/{module_id}", headers=super_admin_headers)
        assert deleted.status_code == status.HTTP_200_OK
        missing = client.get(f"{API}/iam/modules/{module_id}", headers=super_admin_headers)
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    def test_operation_create_and_list(self, client, super_admin_headers):
        client.post(f"{API}/iam/operations/", json={"code": "Read", "name": "Read"}, headers=super_admin_headers)
        client.post(f"{API}/iam/operations/", json={"code": "Create", "name": "Create"}, headers=super_admin_headers)

        response = client.get(f"{API}/iam/operations/", headers=super_admin_headers)

        assert [o["code"] for o in response.json()["data"]] == ["Create", "Read"]

    def test_default_role_template(self, client, super_admin_headers, catalog):
        permission_ids = [catalog.permissions["Report:Read"].permission_id]

        response = client.post(
            f"{API}/iam/default-roles/",
            json={"name": "Auditor", "permission_ids": permission_ids, "is_default": True},
            headers=super_admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["tenant_id"] is None
        assert [p["code"] for p in data["permissions"]] == ["Report:Read"]


class TestPlanRoutes:

    def test_plan_with_modules(self, client, super_admin_headers, catalog):
        vendor_id = catalog.modules["Vendor"].module_id
        report_id = catalog.modules["Report"].module_id

        created = client.post(
            f"{API}/plans/",
            json={"name": "Basic", "price": "99.00", "module_ids": [vendor_id]},
            headers=super_admin_headers,
        )
        assert created.status_code == status.HTTP_201_CREATED
        plan_id = created.json()["data"]["plan_id"]

        assigned = client.post(f"{API}/plans/{plan_id}/modules", json={"module_ids": [vendor_id, report_id]}, headers=super_admin_headers)
        assert {m["code"] for m in assigned.json()["data"]["modules"]} == {"Vendor", "Report"}

        removed = client.request(
            "DELETE", f"{API}/plans/{plan_id}/modules", json={"module_ids": [vendor_id]}, headers=super_admin_headers
        )
        assert [m["code"] for m in removed.json()["data"]["modules"]] == ["Report"]


class TestSubscriptionRoutes:

    def _payload(self, tenant, plan, days=30):
        now = utcnow()
        return {
            "tenant_id": tenant.tenant_id,
            "plan_id": plan.plan_id,
            "start_date": (now - timedelta(days=1)).isoformat(),
            "end_date": (now + timedelta(days=days)).isoformat(),
        }

    def test_create_and_conflict(self, client, super_admin_headers, test_tenant, basic_plan):
        first = client.post(f"{API}/subscriptions/", json=self._payload(test_tenant, basic_plan), headers=super_admin_headers)
        assert first.status_code == status.HTTP_201_CREATED
        assert first.json()["data"]["status"] == "active"

        second = client.post(f"{API}/subscriptions/", json=self._payload(test_tenant, basic_plan), headers=super_admin_headers)
        assert second.status_code == status.HTTP_409_CONFLICT

        by_tenant = client.get(f"{API}/subscriptions/tenant/{test_tenant.tenant_id}", headers=super_admin_headers)
        assert by_tenant.json()["data"]["subscription_id"] == first.json()["data"]["subscription_id"]

    def test_bad_dates_is_400(self, client, super_admin_headers, test_tenant, basic_plan):
        payload = self._payload(test_tenant, basic_plan)
        payload["end_date"] = payload["start_date"]

        response = client.post(f"{API}/subscriptions/", json=payload, headers=super_admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_sweep_and_validity(self, client, super_admin_headers, test_tenant, basic_plan, subscription_factory):
        subscription_factory(test_tenant, basic_plan, days_left=-1)

        swept = client.post(f"{API}/subscriptions/sweep", headers=super_admin_headers)
        assert swept.json()["data"] == {"expired": 1}

        validity = client.get(f"{API}/subscriptions/tenant/{test_tenant.tenant_id}/validity", headers=super_admin_headers)
        assert validity.json()["data"]["is_valid"] is False

    def test_expiring(self, client, super_admin_headers, test_tenant, basic_plan, subscription_factory):
        subscription_factory(test_tenant, basic_plan, days_left=3)

        response = client.get(f"{API}/subscriptions/expiring/7", headers=super_admin_headers)

        assert len(response.json()["data"]) == 1


class TestTenantRoutes:

    def test_create_tenant_returns_admin(self, client, super_admin_headers):
        response = client.post(
            f"{API}/tenants/",
            json={
                "company_name": "Initech Scrap",
                "email": "office@initech.com",
                "admin_name": "Peter Gibbons",
                "admin_email": "peter@initech.com",
                "admin_password": "Secret@123",
            },
            headers=super_admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["admin"]["tenant_id"] == data["tenant"]["tenant_id"]
        assert "password" not in data["admin"]

        login = client.post(f"{API}/auth/login", json={"email": "peter@initech.com", "password": "Secret@123"})
        assert login.status_code == status.HTTP_200_OK


class TestSeedRoutes:

    def test_seed_is_open_and_idempotent(self, client):
        first = client.post(f"{API}/seeder/seed")
        second = client.post(f"{API}/seeder/seed")

        assert first.status_code == status.HTTP_200_OK
        assert second.json()["data"]["modules"].startswith("Modules: 0 created")

    def test_migration_requires_super_admin(self, client):
        response = client.post(f"{API}/seeder/migrate-permissions")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
