from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional, List


class LoginRequest(BaseModel):
    """Schema for login"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1)


class TokenPayload(BaseModel):
    """Identity claims carried by the access token"""
    user_id: int
    tenant_id: Optional[int] = None
    role_id: Optional[int] = None
    is_super_admin: bool = False


class UserSummary(BaseModel):
    user_id: int
    name: str
    email: str
    tenant_id: Optional[int] = None
    company_name: Optional[str] = None
    role_id: Optional[int] = None
    role_name: Optional[str] = None
    is_super_admin: bool = False
    permissions: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary
