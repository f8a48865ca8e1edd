from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.iam import OperationCreate, OperationResponse, OperationUpdate
from app.services.catalog_service import catalog_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/operations", tags=["IAM Operations"])


@router.get("/", response_model=dict)
def list_operations(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    operations = catalog_service.list_operations(db)
    return ResponseWrapper.success(
        data=[OperationResponse.model_validate(o) for o in operations],
        message="Operations fetched successfully",
    )


@router.get("/{operation_id}", response_model=dict)
def get_operation(operation_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    operation = catalog_service.get_operation(db, operation_id)
    return ResponseWrapper.success(data=OperationResponse.model_validate(operation), message="Operation fetched successfully")


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_operation(operation: OperationCreate, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    new_operation = catalog_service.create_operation(db, operation, user_id=user_data["user_id"])
    return ResponseWrapper.created(
        data=OperationResponse.model_validate(new_operation), message="Operation created successfully"
    )


@router.put("/{operation_id}", response_model=dict)
def update_operation(
    operation_id: int,
    operation: OperationUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    updated = catalog_service.update_operation(db, operation_id, operation, user_id=user_data["user_id"])
    return ResponseWrapper.updated(data=OperationResponse.model_validate(updated), message="Operation updated successfully")


@router.patch("/{operation_id}/toggle-status", response_model=dict)
def toggle_operation_status(operation_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    operation = catalog_service.toggle_operation_active(db, operation_id, user_id=user_data["user_id"])
    state = "activated" if operation.is_active else "deactivated"
    return ResponseWrapper.updated(data=OperationResponse.model_validate(operation), message=f"Operation {state} successfully")


@router.delete("/{operation_id}", response_model=dict)
def delete_operation(operation_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    catalog_service.soft_delete_operation(db, operation_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Operation deleted successfully")
