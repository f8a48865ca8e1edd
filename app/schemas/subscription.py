from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.subscription import SubscriptionStatusEnum


class SubscriptionCreate(BaseModel):
    tenant_id: int
    plan_id: int
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatusEnum = SubscriptionStatusEnum.ACTIVE


class SubscriptionUpdate(BaseModel):
    plan_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[SubscriptionStatusEnum] = None


class SubscriptionResponse(BaseModel):
    subscription_id: int
    tenant_id: int
    plan_id: int
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatusEnum
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
