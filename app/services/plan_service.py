from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.logging_config import get_logger
from app.crud.iam import module_crud
from app.crud.plan import plan_crud
from app.database.session import transaction
from app.models import Plan
from app.schemas.plan import PlanCreate, PlanUpdate

logger = get_logger(__name__)


class PlanService:
    """
    Plans and the modules they unlock.

    Module ids are resolved by lookup: ids that do not match a live module are
    dropped without error, so assigning the same list twice gives the same set.
    """

    def list_plans(self, db: Session) -> List[Plan]:
        return plan_crud.get_all(db)

    def get_plan(self, db: Session, plan_id: int) -> Plan:
        plan = plan_crud.get(db, plan_id)
        if not plan:
            raise NotFoundError(f"Plan with ID {plan_id} not found")
        return plan

    def create_plan(self, db: Session, obj_in: PlanCreate, user_id: Optional[int] = None) -> Plan:
        data = obj_in.model_dump(exclude={"module_ids"})
        with transaction(db):
            plan = plan_crud.create(db, obj_in=data, user_id=user_id)
            plan.modules = module_crud.get_many(db, obj_in.module_ids)
        db.refresh(plan)
        logger.info(f"Plan created: id={plan.plan_id}, name={plan.name}, modules={sorted(plan.module_ids)}")
        return plan

    def update_plan(self, db: Session, plan_id: int, obj_in: PlanUpdate, user_id: Optional[int] = None) -> Plan:
        update_data = obj_in.model_dump(exclude_unset=True)
        module_ids = update_data.pop("module_ids", None)
        with transaction(db):
            plan = self.get_plan(db, plan_id)
            plan = plan_crud.update(db, db_obj=plan, obj_in=update_data, user_id=user_id)
            if module_ids is not None:
                plan.modules = module_crud.get_many(db, module_ids)
        db.refresh(plan)
        logger.info(f"Plan updated: id={plan_id}")
        return plan

    def assign_modules(self, db: Session, plan_id: int, module_ids: Iterable[int], user_id: Optional[int] = None) -> Plan:
        """Replace the plan's module set."""
        with transaction(db):
            plan = self.get_plan(db, plan_id)
            plan.modules = module_crud.get_many(db, module_ids)
            plan_crud.update(db, db_obj=plan, obj_in={}, user_id=user_id)
        db.refresh(plan)
        logger.info(f"Plan {plan_id} modules set to {sorted(plan.module_ids)}")
        return plan

    def remove_modules(self, db: Session, plan_id: int, module_ids: Iterable[int], user_id: Optional[int] = None) -> Plan:
        to_remove = set(module_ids)
        with transaction(db):
            plan = self.get_plan(db, plan_id)
            plan.modules = [m for m in plan.modules if m.module_id not in to_remove]
            plan_crud.update(db, db_obj=plan, obj_in={}, user_id=user_id)
        db.refresh(plan)
        logger.info(f"Plan {plan_id} modules now {sorted(plan.module_ids)}")
        return plan

    def toggle_active(self, db: Session, plan_id: int, user_id: Optional[int] = None) -> Plan:
        with transaction(db):
            plan = self.get_plan(db, plan_id)
            plan_crud.update(db, db_obj=plan, obj_in={"is_active": not plan.is_active}, user_id=user_id)
        db.refresh(plan)
        logger.info(f"Plan {plan_id} is_active -> {plan.is_active}")
        return plan

    def soft_delete(self, db: Session, plan_id: int, user_id: Optional[int] = None) -> Plan:
        with transaction(db):
            plan = self.get_plan(db, plan_id)
            plan_crud.soft_remove(db, db_obj=plan, user_id=user_id)
        logger.info(f"Plan {plan_id} deleted")
        return plan


plan_service = PlanService()
