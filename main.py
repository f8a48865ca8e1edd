from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from app.config import settings
from app.core.exceptions import AppException
from app.core.logging_config import setup_logging, get_logger
from app.database.session import get_db
from app.routes import (
    auth_router,
    default_role_router,
    module_router,
    operation_router,
    permission_router,
    plan_router,
    role_router,
    seed_router,
    subscription_router,
    tenant_router,
    user_router,
)
from app.utils.response_utils import ResponseWrapper, app_exception_handler
from app.utils.task_manager import task_manager

# Setup logging as early as possible
setup_logging(force_configure=True)
logger = get_logger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Tenant-scoped roles and permissions gated by subscription plans",
    version=settings.APP_VERSION,
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppException, app_exception_handler)

# Include routers
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(tenant_router, prefix=settings.API_PREFIX)
app.include_router(user_router, prefix=settings.API_PREFIX)
app.include_router(plan_router, prefix=settings.API_PREFIX)
app.include_router(subscription_router, prefix=settings.API_PREFIX)
app.include_router(seed_router, prefix=settings.API_PREFIX)

# Include IAM routers
app.include_router(module_router, prefix=f"{settings.API_PREFIX}/iam")
app.include_router(operation_router, prefix=f"{settings.API_PREFIX}/iam")
app.include_router(permission_router, prefix=f"{settings.API_PREFIX}/iam")
app.include_router(role_router, prefix=f"{settings.API_PREFIX}/iam")
app.include_router(default_role_router, prefix=f"{settings.API_PREFIX}/iam")


@app.on_event("startup")
async def on_startup():
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENV})")
    if settings.CREATE_TABLES_ON_STARTUP:
        from app.database.create_tables import create_tables
        create_tables()
    if settings.SUBSCRIPTION_SWEEP_ENABLED:
        task_manager.start()


@app.on_event("shutdown")
async def on_shutdown():
    await task_manager.stop()


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return ResponseWrapper.success(data={"database": "ok"}, message="I Am Alive!!")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
