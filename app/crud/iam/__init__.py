from app.crud.iam.module import module_crud
from app.crud.iam.operation import operation_crud
from app.crud.iam.permission import permission_crud
from app.crud.iam.role import role_crud
