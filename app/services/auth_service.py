"""
Login flow and token validation.

Every login rejection is raised as the same ``UnauthorizedError`` with the
message "Invalid credentials"; which check failed is only logged and kept on
``UnauthorizedError.reason``.
"""
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import UnauthorizedError
from app.core.logging_config import get_logger
from app.crud.iam import role_crud
from app.crud.user import user_crud
from app.models import User
from app.schemas.auth import LoginResponse, TokenPayload, UserSummary
from app.services.subscription_service import subscription_service
from common_utils.auth.utils import TokenError, create_access_token, hash_password, verify_password, verify_token

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:

    def login(self, db: Session, email: str, password: str) -> LoginResponse:
        user = user_crud.get_by_email(db, email=email)
        if not user:
            self._reject(email, "Invalid credentials")

        if not user.is_active:
            self._reject(email, "User account is deactivated")

        if not verify_password(password, user.password):
            self._reject(email, "Invalid credentials")

        # Super admins skip the tenant and subscription checks
        if not user.is_super_admin:
            if user.tenant is not None and (not user.tenant.is_active or user.tenant.is_deleted):
                self._reject(email, "Tenant account is deactivated")
            if user.tenant_id is not None and not subscription_service.is_valid(db, user.tenant_id):
                self._reject(email, "Tenant subscription has expired. Please contact support.")

        permissions = self.resolve_permission_codes(db, user)
        payload = TokenPayload(
            user_id=user.user_id,
            tenant_id=user.tenant_id,
            role_id=user.role_id,
            is_super_admin=user.is_super_admin,
        )
        access_token = create_access_token(**payload.model_dump())

        logger.info(f"Login succeeded: user_id={user.user_id}, tenant_id={user.tenant_id}, permissions={len(permissions)}")
        return LoginResponse(access_token=access_token, user=self.summarize(user, permissions))

    def resolve_permission_codes(self, db: Session, user: User) -> List[str]:
        """Permission codes granted through the user's role; empty without a live, active role."""
        if user.role_id is None:
            return []
        role = role_crud.get(db, user.role_id)
        if role is None or not role.is_active:
            return []
        return role.permission_codes

    def validate_token(self, token: str) -> Dict[str, Any]:
        try:
            payload = verify_token(token)
        except TokenError as e:
            logger.debug(f"Token rejected: {e}")
            raise UnauthorizedError("Invalid or expired token", reason=str(e), error_code="INVALID_TOKEN") from e
        return payload

    def hash_password(self, plain: str) -> str:
        return hash_password(plain)

    def _reject(self, email: str, reason: str):
        logger.warning(f"Login rejected for {email}: {reason}")
        raise UnauthorizedError(INVALID_CREDENTIALS, reason=reason, error_code="INVALID_CREDENTIALS")

    @staticmethod
    def summarize(user: User, permissions: List[str]) -> UserSummary:
        role = user.role if user.role_id is not None else None
        return UserSummary(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            tenant_id=user.tenant_id,
            company_name=user.tenant.company_name if user.tenant is not None else None,
            role_id=user.role_id,
            role_name=role.name if role is not None else None,
            is_super_admin=user.is_super_admin,
            permissions=permissions,
        )


auth_service = AuthService()
