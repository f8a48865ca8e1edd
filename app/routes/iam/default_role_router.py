from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.iam import DefaultRoleCreate, DefaultRoleUpdate, RoleResponse
from app.services.role_service import role_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/default-roles", tags=["IAM Default Roles"])


@router.get("/", response_model=dict)
def list_default_roles(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    roles = role_service.list_defaults(db)
    return ResponseWrapper.success(
        data=[RoleResponse.model_validate(r) for r in roles],
        message="Default roles fetched successfully",
    )


@router.get("/{role_id}", response_model=dict)
def get_default_role(role_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    role = role_service.get_default(db, role_id)
    return ResponseWrapper.success(data=RoleResponse.model_validate(role), message="Default role fetched successfully")


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_default_role(role: DefaultRoleCreate, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    """Create a system role template. Templates are not bound to any plan."""
    new_role = role_service.create_default(db, role, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=RoleResponse.model_validate(new_role), message="Default role created successfully")


@router.put("/{role_id}", response_model=dict)
def update_default_role(
    role_id: int,
    role: DefaultRoleUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    updated = role_service.update_default(db, role_id, role, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=RoleResponse.model_validate(updated), message="Default role updated successfully")


@router.patch("/{role_id}/toggle-status", response_model=dict)
def toggle_default_role_status(role_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    role = role_service.toggle_default(db, role_id, user_id=user_data["user_id"])
    state = "activated" if role.is_active else "deactivated"
    return ResponseWrapper.updated(data=RoleResponse.model_validate(role), message=f"Default role {state} successfully")


@router.delete("/{role_id}", response_model=dict)
def delete_default_role(role_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    role_service.delete_default(db, role_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Default role deleted successfully")
