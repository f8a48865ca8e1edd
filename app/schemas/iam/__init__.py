from app.schemas.iam.module import ModuleBase, ModuleCreate, ModuleUpdate, ModuleResponse
from app.schemas.iam.operation import OperationBase, OperationCreate, OperationUpdate, OperationResponse
from app.schemas.iam.permission import PermissionResponse
from app.schemas.iam.role import (
    RoleBase, RoleCreate, RoleUpdate, RolePermissionAssign, RoleResponse,
    DefaultRoleCreate, DefaultRoleUpdate,
)
