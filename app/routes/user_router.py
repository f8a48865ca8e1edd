from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.user import (
    PasswordChangeRequest,
    PasswordResetRequest,
    SuperAdminCreate,
    UserCreate,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from app.services.user_service import user_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly, TenantUser
from common_utils.auth.token_validation import validate_bearer_token

router = APIRouter(prefix="/users", tags=["Users"])


# ----------------------------------------------------------------------
# Super admins
# ----------------------------------------------------------------------
@router.post("/super-admin", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_super_admin(body: SuperAdminCreate, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    user = user_service.create_super_admin(db, body, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=UserResponse.model_validate(user), message="Super admin created successfully")


@router.get("/super-admin", response_model=dict)
def list_super_admins(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    users = user_service.list_super_admins(db)
    return ResponseWrapper.success(data=[UserResponse.model_validate(u) for u in users], message="Super admins fetched successfully")


@router.get("/super-admin/{target_id}", response_model=dict)
def get_super_admin(target_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    user = user_service.get_super_admin(db, target_id)
    return ResponseWrapper.success(data=UserResponse.model_validate(user), message="Super admin fetched successfully")


@router.put("/super-admin/{target_id}", response_model=dict)
def update_super_admin(
    target_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    user = user_service.update_super_admin(db, target_id, body, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=UserResponse.model_validate(user), message="Super admin updated successfully")


@router.delete("/super-admin/{target_id}", response_model=dict)
def delete_super_admin(target_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    user_service.remove_super_admin(db, target_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Super admin deleted successfully")


@router.put("/super-admin/{target_id}/reset-password", response_model=dict)
def reset_super_admin_password(
    target_id: int,
    body: PasswordResetRequest,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    user_service.reset_password(db, None, target_id, body.new_password, user_id=user_data["user_id"])
    return ResponseWrapper.success(message="Password reset successfully")


# ----------------------------------------------------------------------
# Own account
# ----------------------------------------------------------------------
@router.put("/me/change-password", response_model=dict)
def change_own_password(
    body: PasswordChangeRequest,
    db: Session = Depends(get_db),
    user_data=Depends(validate_bearer_token()),
):
    user_service.change_password(db, user_data["user_id"], body.current_password, body.new_password)
    return ResponseWrapper.success(message="Password changed successfully")


# ----------------------------------------------------------------------
# Tenant users
# ----------------------------------------------------------------------
@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, db: Session = Depends(get_db), user_data=Depends(TenantUser(["User:Create"]))):
    """Create a user in the caller's tenant. `role_id` must be a role of that tenant."""
    user = user_service.create_tenant_user(db, user_data["tenant_id"], body, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=UserResponse.model_validate(user), message="User created successfully")


@router.get("/", response_model=dict)
def list_users(db: Session = Depends(get_db), user_data=Depends(TenantUser(["User:List", "User:Read"]))):
    users = user_service.list_tenant_users(db, user_data["tenant_id"])
    return ResponseWrapper.success(data=[UserResponse.model_validate(u) for u in users], message="Users fetched successfully")


@router.get("/{target_id}", response_model=dict)
def get_user(target_id: int, db: Session = Depends(get_db), user_data=Depends(TenantUser(["User:Read"]))):
    user = user_service.get_tenant_user(db, user_data["tenant_id"], target_id)
    return ResponseWrapper.success(data=UserResponse.model_validate(user), message="User fetched successfully")


@router.put("/{target_id}", response_model=dict)
def update_user(
    target_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["User:Update"])),
):
    user = user_service.update_tenant_user(db, user_data["tenant_id"], target_id, body, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=UserResponse.model_validate(user), message="User updated successfully")


@router.put("/{target_id}/role", response_model=dict)
def update_user_role(
    target_id: int,
    body: UserRoleUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["User:Update"])),
):
    user = user_service.update_user_role(
        db, user_data["tenant_id"], target_id, body.role_id, user_id=user_data["user_id"]
    )
    return ResponseWrapper.updated(data=UserResponse.model_validate(user), message="User role updated successfully")


@router.patch("/{target_id}/toggle-status", response_model=dict)
def toggle_user_status(target_id: int, db: Session = Depends(get_db), user_data=Depends(TenantUser(["User:Update"]))):
    user = user_service.toggle_tenant_user(db, user_data["tenant_id"], target_id, user_id=user_data["user_id"])
    state = "activated" if user.is_active else "deactivated"
    return ResponseWrapper.updated(data=UserResponse.model_validate(user), message=f"User {state} successfully")


@router.put("/{target_id}/reset-password", response_model=dict)
def reset_user_password(
    target_id: int,
    body: PasswordResetRequest,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["User:Update"])),
):
    user_service.reset_password(db, user_data["tenant_id"], target_id, body.new_password, user_id=user_data["user_id"])
    return ResponseWrapper.success(message="Password reset successfully")


@router.delete("/{target_id}", response_model=dict)
def delete_user(target_id: int, db: Session = Depends(get_db), user_data=Depends(TenantUser(["User:Delete"]))):
    user_service.remove_tenant_user(db, user_data["tenant_id"], target_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="User deleted successfully")
