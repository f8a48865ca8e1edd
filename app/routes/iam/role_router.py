from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.database.session import get_db
from app.schemas.iam import PermissionResponse, RoleCreate, RolePermissionAssign, RoleResponse, RoleUpdate
from app.services.role_service import role_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import TenantUser

logger = get_logger(__name__)

router = APIRouter(prefix="/roles", tags=["IAM Roles"])


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_role(
    role: RoleCreate,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["Role:Create"])),
):
    """
    Create a role in the caller's tenant.

    **Required permissions:** `Role:Create`

    When `permission_ids` is given every id must belong to a module of the
    tenant's current plan; otherwise nothing is created and a 400 lists the
    offending ids under `details.invalid_permission_ids`.
    """
    new_role = role_service.create(db, user_data["tenant_id"], role, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=RoleResponse.model_validate(new_role), message="Role created successfully")


@router.get("/", response_model=dict)
def list_roles(db: Session = Depends(get_db), user_data=Depends(TenantUser(["Role:List", "Role:Read"]))):
    roles = role_service.list(db, user_data["tenant_id"])
    return ResponseWrapper.success(
        data=[RoleResponse.model_validate(r) for r in roles],
        message="Roles fetched successfully",
    )


@router.get("/available-permissions", response_model=dict)
def get_available_permissions(db: Session = Depends(get_db), user_data=Depends(TenantUser(["Role:Read"]))):
    """Permissions the tenant's current plan allows; empty without a valid subscription."""
    permissions = role_service.get_available_permissions(db, user_data["tenant_id"])
    return ResponseWrapper.success(
        data=[PermissionResponse.model_validate(p) for p in permissions],
        message="Available permissions fetched successfully",
    )


@router.get("/{role_id}", response_model=dict)
def get_role(role_id: int, db: Session = Depends(get_db), user_data=Depends(TenantUser(["Role:Read"]))):
    role = role_service.get(db, user_data["tenant_id"], role_id)
    return ResponseWrapper.success(data=RoleResponse.model_validate(role), message="Role fetched successfully")


@router.put("/{role_id}", response_model=dict)
def update_role(
    role_id: int,
    role: RoleUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["Role:Update"])),
):
    updated = role_service.update(db, user_data["tenant_id"], role_id, role, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=RoleResponse.model_validate(updated), message="Role updated successfully")


@router.put("/{role_id}/permissions", response_model=dict)
def assign_permissions(
    role_id: int,
    body: RolePermissionAssign,
    db: Session = Depends(get_db),
    user_data=Depends(TenantUser(["Role:Update"])),
):
    """Replace the role's permission set. A rejected request leaves the stored set as it was."""
    role = role_service.assign_permissions(
        db, user_data["tenant_id"], role_id, body.permission_ids, user_id=user_data["user_id"]
    )
    return ResponseWrapper.updated(data=RoleResponse.model_validate(role), message="Permissions assigned successfully")


@router.delete("/{role_id}", response_model=dict)
def delete_role(role_id: int, db: Session = Depends(get_db), user_data=Depends(TenantUser(["Role:Delete"]))):
    role_service.remove(db, user_data["tenant_id"], role_id, user_id=user_data["user_id"])
    logger.info(f"Role {role_id} deleted by user {user_data['user_id']}")
    return ResponseWrapper.deleted(message="Role deleted successfully")
