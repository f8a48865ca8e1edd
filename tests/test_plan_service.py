"""
Tests for plans and the modules they unlock.
"""
from decimal import Decimal

import pytest

from app.core.exceptions import NotFoundError
from app.models import BillingCycleEnum
from app.schemas.plan import PlanCreate, PlanUpdate
from app.services.catalog_service import catalog_service
from app.services.plan_service import plan_service


def _ids(catalog, *codes):
    return [catalog.modules[code].module_id for code in codes]


def test_create_plan_with_modules(test_db, catalog):
    plan = plan_service.create_plan(
        test_db,
        PlanCreate(name="Basic", price=Decimal("99.00"), module_ids=_ids(catalog, "Vendor", "Material")),
        user_id=1,
    )

    assert plan.plan_id is not None
    assert plan.billing_cycle == BillingCycleEnum.MONTHLY
    assert plan.module_ids == set(_ids(catalog, "Vendor", "Material"))
    assert plan.created_by == 1


def test_unknown_module_ids_are_dropped(test_db, catalog):
    plan = plan_service.create_plan(
        test_db,
        PlanCreate(name="Basic", module_ids=_ids(catalog, "Vendor") + [9999]),
    )

    assert plan.module_ids == set(_ids(catalog, "Vendor"))


def test_assign_modules_replaces_the_set(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic", module_ids=_ids(catalog, "Vendor")))

    plan = plan_service.assign_modules(test_db, plan.plan_id, _ids(catalog, "Material", "Report"), user_id=2)

    assert plan.module_ids == set(_ids(catalog, "Material", "Report"))
    assert plan.updated_by == 2


def test_assign_same_list_twice_is_stable(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic"))
    ids = _ids(catalog, "Vendor", "Material", "Vendor")

    first = set(plan_service.assign_modules(test_db, plan.plan_id, ids).module_ids)
    second = set(plan_service.assign_modules(test_db, plan.plan_id, ids).module_ids)

    assert first == second == set(_ids(catalog, "Vendor", "Material"))


def test_remove_modules(test_db, catalog):
    plan = plan_service.create_plan(
        test_db, PlanCreate(name="Standard", module_ids=_ids(catalog, "Vendor", "Material", "Report"))
    )

    plan = plan_service.remove_modules(test_db, plan.plan_id, _ids(catalog, "Report") + [9999])

    assert plan.module_ids == set(_ids(catalog, "Vendor", "Material"))


def test_update_plan_fields_and_modules(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic", module_ids=_ids(catalog, "Vendor")))

    updated = plan_service.update_plan(
        test_db,
        plan.plan_id,
        PlanUpdate(price=Decimal("149.00"), billing_cycle=BillingCycleEnum.YEARLY, module_ids=_ids(catalog, "Report")),
    )

    assert updated.price == Decimal("149.00")
    assert updated.billing_cycle == BillingCycleEnum.YEARLY
    assert updated.module_ids == set(_ids(catalog, "Report"))


def test_update_without_module_ids_keeps_modules(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic", module_ids=_ids(catalog, "Vendor")))

    updated = plan_service.update_plan(test_db, plan.plan_id, PlanUpdate(description="Starter"))

    assert updated.description == "Starter"
    assert updated.module_ids == set(_ids(catalog, "Vendor"))


def test_toggle_and_soft_delete(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic"))

    assert plan_service.toggle_active(test_db, plan.plan_id).is_active is False

    plan_service.soft_delete(test_db, plan.plan_id, user_id=8)
    with pytest.raises(NotFoundError):
        plan_service.get_plan(test_db, plan.plan_id)
    assert plan_service.list_plans(test_db) == []


def test_deleted_module_drops_out_of_plan(test_db, catalog):
    plan = plan_service.create_plan(test_db, PlanCreate(name="Basic", module_ids=_ids(catalog, "Vendor", "Material")))

    catalog_service.soft_delete_module(test_db, catalog.modules["Material"].module_id)
    test_db.expire_all()

    assert plan_service.get_plan(test_db, plan.plan_id).module_ids == set(_ids(catalog, "Vendor"))


def test_missing_plan(test_db):
    with pytest.raises(NotFoundError):
        plan_service.assign_modules(test_db, 404, [])
