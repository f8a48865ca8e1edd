# ── Auth ──────────────────────────────────────────────────────
from app.routes.auth_router import router as auth_router

# ── Tenants & users ───────────────────────────────────────────
from app.routes.tenant_router import router as tenant_router
from app.routes.user_router import router as user_router

# ── Plans & subscriptions ─────────────────────────────────────
from app.routes.plan_router import router as plan_router
from app.routes.subscription_router import router as subscription_router

# ── IAM ───────────────────────────────────────────────────────
from app.routes.iam import (
    default_role_router,
    module_router,
    operation_router,
    permission_router,
    role_router,
)

# ── Seed ──────────────────────────────────────────────────────
from app.routes.seed import router as seed_router
