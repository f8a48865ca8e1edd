from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class ModuleBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=50, description="Stable identifier, e.g. Vendor")
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class ModuleCreate(ModuleBase):
    is_active: bool = True


class ModuleUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class ModuleResponse(ModuleBase):
    module_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
