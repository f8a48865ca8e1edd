from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class OperationBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=50, description="Action kind, e.g. Create")
    name: str = Field(..., min_length=1, max_length=50)


class OperationCreate(OperationBase):
    is_active: bool = True


class OperationUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=50)


class OperationResponse(OperationBase):
    operation_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
