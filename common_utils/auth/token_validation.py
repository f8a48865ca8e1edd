from typing import Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.logging_config import get_logger
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.utils import TokenError, verify_token

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(message: str, error_code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ResponseWrapper.error(message=message, error_code=error_code),
        headers={"WWW-Authenticate": "Bearer"},
    )


def validate_bearer_token():
    """
    Dependency factory decoding the ``Authorization: Bearer`` access token.

    The returned dependency yields the identity claims
    (``user_id``, ``tenant_id``, ``role_id``, ``is_super_admin``).
    """
    async def get_token_data(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Dict:
        if credentials is None:
            raise _unauthorized("Not authenticated", "MISSING_TOKEN")

        try:
            payload = verify_token(credentials.credentials)
        except TokenError as e:
            logger.warning(f"JWT validation error: {e}")
            raise _unauthorized("Invalid or expired token", "INVALID_TOKEN")

        if payload.get("token_type") != "access" or not payload.get("user_id"):
            logger.warning(f"Token without access claims rejected: {payload}")
            raise _unauthorized("Invalid authentication token", "INVALID_TOKEN")

        return {
            "user_id": payload["user_id"],
            "tenant_id": payload.get("tenant_id"),
            "role_id": payload.get("role_id"),
            "is_super_admin": bool(payload.get("is_super_admin", False)),
        }

    return get_token_data
