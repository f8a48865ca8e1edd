from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, ConfigDict


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class SuperAdminCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    role_id: int


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class UserRoleUpdate(BaseModel):
    role_id: int


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=6)


class UserResponse(UserBase):
    user_id: int
    tenant_id: Optional[int] = None
    role_id: Optional[int] = None
    is_super_admin: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
