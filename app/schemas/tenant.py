from datetime import datetime
import re
from typing import Optional, Dict, Any
from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict

# Regex patterns
PHONE_REGEX = r'^\+?[0-9][0-9\s-]{6,19}$'


class TenantBase(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=255, description="Registered company name")
    email: EmailStr = Field(..., description="Company contact email")
    phone: Optional[str] = Field(None, description="Company phone")
    address: Optional[str] = Field(None, description="Company address")

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if v is not None and not re.match(PHONE_REGEX, v):
            raise ValueError('Phone number must contain 7-20 digits, optionally prefixed with +')
        return v


class TenantCreate(TenantBase):
    external_db_config: Optional[Dict[str, Any]] = None
    admin_name: str = Field(..., min_length=2, max_length=255, description="Tenant admin full name")
    admin_email: EmailStr = Field(..., description="Tenant admin login email")
    admin_password: str = Field(..., min_length=6, description="Tenant admin password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "company_name": "Acme Metals",
                "email": "contact@acmemetals.com",
                "phone": "+911234567890",
                "address": "Plot 7, Industrial Area",
                "admin_name": "Asha Rao",
                "admin_email": "asha@acmemetals.com",
                "admin_password": "Secret@123",
            }
        }
    )


class TenantUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    external_db_config: Optional[Dict[str, Any]] = None


class TenantResponse(BaseModel):
    tenant_id: int
    company_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
