from typing import Dict, List

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.crud.user import user_crud
from app.database.session import get_db
from app.services.auth_service import auth_service
from app.utils.response_utils import ResponseWrapper

from .token_validation import validate_bearer_token

logger = get_logger(__name__)


def _forbidden(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=ResponseWrapper.error(message=message, error_code="FORBIDDEN"),
    )


def _load_active_user(db: Session, user_data: Dict):
    user = user_crud.get(db, user_data["user_id"])
    if not user or not user.is_active:
        logger.warning(f"Token for missing or inactive user {user_data['user_id']}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ResponseWrapper.error(message="User account is not available", error_code="INVALID_TOKEN"),
        )
    return user


class PermissionChecker:
    """
    Route guard matching the caller's permission codes against ``required_permissions``.

    Passing any one of the required codes is enough. Super admins always pass.
    Codes are read from the caller's role on each request, so role edits take
    effect without a new login.
    """

    def __init__(self, required_permissions: List[str]):
        self.required_permissions = required_permissions

    def __call__(
        self,
        user_data: Dict = Depends(validate_bearer_token()),
        db: Session = Depends(get_db),
    ) -> Dict:
        user = _load_active_user(db, user_data)

        if user.is_super_admin:
            return {**user_data, "is_super_admin": True, "permissions": []}

        user_permissions = auth_service.resolve_permission_codes(db, user)
        if not any(p in user_permissions for p in self.required_permissions):
            logger.warning(
                f"Permission denied for user {user.user_id}. Required: {self.required_permissions}"
            )
            raise _forbidden("Insufficient permissions")

        return {**user_data, "tenant_id": user.tenant_id, "permissions": user_permissions}


class SuperAdminOnly:
    """Route guard admitting super admins only."""

    def __call__(
        self,
        user_data: Dict = Depends(validate_bearer_token()),
        db: Session = Depends(get_db),
    ) -> Dict:
        user = _load_active_user(db, user_data)
        if not user.is_super_admin:
            logger.warning(f"Super admin route refused for user {user.user_id}")
            raise _forbidden("Super admin access required")
        return {**user_data, "is_super_admin": True}


class TenantUser:
    """Route guard for callers bound to a tenant; returns the token data with a ``tenant_id``."""

    def __init__(self, required_permissions: List[str]):
        self.checker = PermissionChecker(required_permissions)

    def __call__(self, user_data: Dict = Depends(validate_bearer_token()), db: Session = Depends(get_db)) -> Dict:
        user_data = self.checker(user_data=user_data, db=db)
        if user_data.get("tenant_id") is None:
            raise _forbidden("Tenant context required")
        return user_data
