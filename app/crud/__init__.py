# Import all CRUD modules for easier access
from app.crud.iam import module_crud, operation_crud, permission_crud, role_crud
from app.crud.plan import plan_crud
from app.crud.subscription import subscription_crud
from app.crud.tenant import tenant_crud
from app.crud.user import user_crud
