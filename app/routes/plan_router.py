from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.plan import PlanCreate, PlanModules, PlanResponse, PlanUpdate
from app.services.plan_service import plan_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/plans", tags=["Plans"])


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_plan(plan: PlanCreate, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    """Create a plan. Unknown or deleted ids in `module_ids` are ignored."""
    new_plan = plan_service.create_plan(db, plan, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=PlanResponse.model_validate(new_plan), message="Plan created successfully")


@router.get("/", response_model=dict)
def list_plans(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    plans = plan_service.list_plans(db)
    return ResponseWrapper.success(data=[PlanResponse.model_validate(p) for p in plans], message="Plans fetched successfully")


@router.get("/{plan_id}", response_model=dict)
def get_plan(plan_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    plan = plan_service.get_plan(db, plan_id)
    return ResponseWrapper.success(data=PlanResponse.model_validate(plan), message="Plan fetched successfully")


@router.put("/{plan_id}", response_model=dict)
def update_plan(plan_id: int, plan: PlanUpdate, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    updated = plan_service.update_plan(db, plan_id, plan, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=PlanResponse.model_validate(updated), message="Plan updated successfully")


@router.delete("/{plan_id}", response_model=dict)
def delete_plan(plan_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    plan_service.soft_delete(db, plan_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Plan deleted successfully")


@router.post("/{plan_id}/modules", response_model=dict)
def assign_modules(plan_id: int, body: PlanModules, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    """Replace the plan's module set. Unknown or deleted ids are ignored."""
    plan = plan_service.assign_modules(db, plan_id, body.module_ids, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=PlanResponse.model_validate(plan), message="Modules assigned successfully")


@router.delete("/{plan_id}/modules", response_model=dict)
def remove_modules(plan_id: int, body: PlanModules, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    plan = plan_service.remove_modules(db, plan_id, body.module_ids, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=PlanResponse.model_validate(plan), message="Modules removed successfully")


@router.patch("/{plan_id}/toggle-status", response_model=dict)
def toggle_plan_status(plan_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    plan = plan_service.toggle_active(db, plan_id, user_id=user_data["user_id"])
    state = "activated" if plan.is_active else "deactivated"
    return ResponseWrapper.updated(data=PlanResponse.model_validate(plan), message=f"Plan {state} successfully")
