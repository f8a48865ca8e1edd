from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database.session import get_db
from app.schemas.iam import PermissionResponse
from app.services.catalog_service import catalog_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/permissions", tags=["IAM Permissions"])


@router.get("/", response_model=dict)
def list_permissions(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    """Every live permission, ordered by code."""
    permissions = catalog_service.list_permissions(db)
    return ResponseWrapper.success(
        data=[PermissionResponse.model_validate(p) for p in permissions],
        message="Permissions fetched successfully",
    )
