from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.iam import ModuleCreate, ModuleResponse, ModuleUpdate
from app.services.catalog_service import catalog_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/modules", tags=["IAM Modules"])


@router.get("/", response_model=dict)
def list_modules(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    modules = catalog_service.list_modules(db)
    return ResponseWrapper.success(
        data=[ModuleResponse.model_validate(m) for m in modules],
        message="Modules fetched successfully",
    )


@router.get("/{module_id}", response_model=dict)
def get_module(module_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    module = catalog_service.get_module(db, module_id)
    return ResponseWrapper.success(data=ModuleResponse.model_validate(module), message="Module fetched successfully")


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_module(
    module: ModuleCreate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    """Create a module. `code` must not be used by another live module (409 otherwise)."""
    new_module = catalog_service.create_module(db, module, user_id=user_data["user_id"])
    return ResponseWrapper.created(data=ModuleResponse.model_validate(new_module), message="Module created successfully")


@router.put("/{module_id}", response_model=dict)
def update_module(
    module_id: int,
    module: ModuleUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    updated = catalog_service.update_module(db, module_id, module, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=ModuleResponse.model_validate(updated), message="Module updated successfully")


@router.patch("/{module_id}/toggle-status", response_model=dict)
def toggle_module_status(module_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    module = catalog_service.toggle_module_active(db, module_id, user_id=user_data["user_id"])
    state = "activated" if module.is_active else "deactivated"
    return ResponseWrapper.updated(data=ModuleResponse.model_validate(module), message=f"Module {state} successfully")


@router.delete("/{module_id}", response_model=dict)
def delete_module(module_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    """Soft-delete a module together with its permissions."""
    catalog_service.soft_delete_module(db, module_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Module deleted successfully")
