from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.database.session import get_db
from app.schemas.tenant import TenantCreate, TenantResponse, TenantUpdate
from app.schemas.user import UserResponse
from app.services.tenant_service import tenant_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

logger = get_logger(__name__)
router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=dict)
def create_tenant(
    tenant: TenantCreate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    """
    Create a new tenant with its admin role and admin user.

    **Request body:**

    * `company_name`, `email`, `phone`, `address`: tenant details.
    * `admin_name`, `admin_email`, `admin_password`: the tenant admin login.
    * `external_db_config`: connection settings for the tenant's own database (optional).

    **Response:**

    * `tenant`: Newly created tenant object.
    * `admin`: Newly created admin user, holding the tenant's "Tenant Admin" role.

    **Status codes:**

    * `201 Created`: Tenant created successfully.
    * `409 Conflict`: Tenant or admin email already in use.
    """
    logger.info(f"Create tenant request received: {tenant.company_name} <{tenant.email}>")
    new_tenant, admin = tenant_service.create(db, tenant, user_id=user_data["user_id"])
    return ResponseWrapper.created(
        data={
            "tenant": TenantResponse.model_validate(new_tenant),
            "admin": UserResponse.model_validate(admin),
        },
        message="Tenant created successfully",
    )


@router.get("/", response_model=dict)
def list_tenants(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    tenants = tenant_service.list(db)
    return ResponseWrapper.success(
        data=[TenantResponse.model_validate(t) for t in tenants],
        message="Tenants fetched successfully",
    )


@router.get("/{tenant_id}", response_model=dict)
def get_tenant(tenant_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    tenant = tenant_service.get(db, tenant_id)
    return ResponseWrapper.success(data=TenantResponse.model_validate(tenant), message="Tenant fetched successfully")


@router.put("/{tenant_id}", response_model=dict)
def update_tenant(
    tenant_id: int,
    tenant: TenantUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    updated = tenant_service.update(db, tenant_id, tenant, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=TenantResponse.model_validate(updated), message="Tenant updated successfully")


@router.delete("/{tenant_id}", response_model=dict)
def delete_tenant(tenant_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    tenant_service.soft_delete(db, tenant_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Tenant deleted successfully")


@router.patch("/{tenant_id}/toggle-status", response_model=dict)
def toggle_tenant_status(tenant_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    tenant = tenant_service.toggle_active(db, tenant_id, user_id=user_data["user_id"])
    state = "activated" if tenant.is_active else "deactivated"
    return ResponseWrapper.updated(data=TenantResponse.model_validate(tenant), message=f"Tenant {state} successfully")


@router.get("/{tenant_id}/external-db-config", response_model=dict)
def get_external_db_config(tenant_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    tenant = tenant_service.get(db, tenant_id)
    return ResponseWrapper.success(data=tenant.external_db_config, message="External DB config fetched successfully")


@router.put("/{tenant_id}/external-db-config", response_model=dict)
def update_external_db_config(
    tenant_id: int,
    config: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    tenant = tenant_service.update(
        db, tenant_id, TenantUpdate(external_db_config=config), user_id=user_data["user_id"]
    )
    return ResponseWrapper.updated(data=tenant.external_db_config, message="External DB config updated successfully")
