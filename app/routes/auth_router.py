from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import UnauthorizedError
from app.core.logging_config import get_logger
from app.crud.user import user_crud
from app.database.session import get_db
from app.schemas.auth import LoginRequest
from app.services.auth_service import auth_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.token_validation import validate_bearer_token

logger = get_logger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"]
)


@router.post("/login", response_model=dict)
def login(form_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email and password for an access token.

    Rejections (unknown email, wrong password, inactive account or tenant,
    expired subscription) all answer 401 "Invalid credentials".
    """
    logger.info(f"Login attempt for {form_data.email}")
    result = auth_service.login(db, form_data.email, form_data.password)
    return ResponseWrapper.success(data=result, message="Login successful")


@router.get("/me", response_model=dict)
def read_current_user(user_data: Dict = Depends(validate_bearer_token()), db: Session = Depends(get_db)):
    """Token identity plus the permission codes the caller's role grants right now."""
    user = user_crud.get(db, user_data["user_id"])
    if not user or not user.is_active:
        raise UnauthorizedError("Invalid or expired token", reason="User no longer available", error_code="INVALID_TOKEN")
    permissions = auth_service.resolve_permission_codes(db, user)
    return ResponseWrapper.success(
        data=auth_service.summarize(user, permissions),
        message="Current user fetched successfully",
    )
