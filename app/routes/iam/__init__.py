from app.routes.iam.module_router import router as module_router
from app.routes.iam.operation_router import router as operation_router
from app.routes.iam.permission_router import router as permission_router
from app.routes.iam.role_router import router as role_router
from app.routes.iam.default_role_router import router as default_role_router
