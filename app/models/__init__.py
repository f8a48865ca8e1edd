# Import all models here for easier access
from app.models.tenant import Tenant
from app.models.user import User
from app.models.plan import Plan, BillingCycleEnum, plan_module
from app.models.subscription import Subscription, SubscriptionStatusEnum

# IAM models
from app.models.iam import (
    Module,
    Operation,
    Permission,
    Role,
    role_permission,
    RoleScope,
    SystemScope,
    TenantScope,
    build_permission_code,
)
