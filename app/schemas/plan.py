from decimal import Decimal
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from app.models.plan import BillingCycleEnum
from app.schemas.iam.module import ModuleResponse


class PlanBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0)
    billing_cycle: BillingCycleEnum = BillingCycleEnum.MONTHLY


class PlanCreate(PlanBase):
    is_active: bool = True
    module_ids: List[int] = []

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Basic",
                "description": "Essential modules for small yards",
                "price": "49.00",
                "billing_cycle": "monthly",
                "module_ids": [1, 2, 3],
            }
        }
    )


class PlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    billing_cycle: Optional[BillingCycleEnum] = None
    # Replaces the module set when present
    module_ids: Optional[List[int]] = None


class PlanModules(BaseModel):
    module_ids: List[int]


class PlanResponse(PlanBase):
    plan_id: int
    is_active: bool
    modules: List[ModuleResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
