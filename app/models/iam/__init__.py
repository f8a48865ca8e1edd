from app.models.iam.module import Module
from app.models.iam.operation import Operation
from app.models.iam.permission import Permission, build_permission_code
from app.models.iam.role import Role, role_permission, RoleScope, SystemScope, TenantScope
