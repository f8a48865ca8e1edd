"""
Catalog of modules, operations and the permissions derived from them.

Module and operation codes are unique among live rows. A permission code is
``<ModuleCode>:<OperationCode>`` and is never rewritten, so a code change is
refused while permissions still reference the module or operation.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.logging_config import get_logger
from app.crud.iam import module_crud, operation_crud, permission_crud
from app.database.session import transaction
from app.models.iam import Module, Operation, Permission
from app.schemas.iam import ModuleCreate, ModuleUpdate, OperationCreate, OperationUpdate

logger = get_logger(__name__)


class CatalogService:

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------
    def list_modules(self, db: Session) -> List[Module]:
        return module_crud.get_all(db)

    def get_module(self, db: Session, module_id: int) -> Module:
        module = module_crud.get(db, module_id)
        if not module:
            raise NotFoundError(f"Module with ID {module_id} not found")
        return module

    def create_module(self, db: Session, obj_in: ModuleCreate, user_id: Optional[int] = None) -> Module:
        with transaction(db):
            if module_crud.get_by_code(db, code=obj_in.code):
                raise ConflictError(f"Module with code '{obj_in.code}' already exists")
            module = module_crud.create(db, obj_in=obj_in, user_id=user_id)
        db.refresh(module)
        logger.info(f"Module created: id={module.module_id}, code={module.code}")
        return module

    def update_module(self, db: Session, module_id: int, obj_in: ModuleUpdate, user_id: Optional[int] = None) -> Module:
        with transaction(db):
            module = self.get_module(db, module_id)
            if obj_in.code is not None and obj_in.code != module.code:
                if module_crud.get_by_code(db, code=obj_in.code):
                    raise ConflictError(f"Module with code '{obj_in.code}' already exists")
                if permission_crud.get_by_modules(db, module_ids=[module_id]):
                    raise BadRequestError(
                        "Module code cannot change while permissions reference it",
                        details={"module_id": module_id},
                    )
            module = module_crud.update(db, db_obj=module, obj_in=obj_in, user_id=user_id)
        db.refresh(module)
        logger.info(f"Module updated: id={module_id}")
        return module

    def toggle_module_active(self, db: Session, module_id: int, user_id: Optional[int] = None) -> Module:
        with transaction(db):
            module = self.get_module(db, module_id)
            module = module_crud.update(db, db_obj=module, obj_in={"is_active": not module.is_active}, user_id=user_id)
        db.refresh(module)
        logger.info(f"Module {module_id} is_active -> {module.is_active}")
        return module

    def soft_delete_module(self, db: Session, module_id: int, user_id: Optional[int] = None) -> Module:
        """Soft delete a module together with the permissions built on it."""
        with transaction(db):
            module = self.get_module(db, module_id)
            removed = permission_crud.soft_remove_by_module(db, module_id=module_id, user_id=user_id)
            module_crud.soft_remove(db, db_obj=module, user_id=user_id)
        logger.info(f"Module {module_id} deleted along with {removed} permission(s)")
        return module

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def list_operations(self, db: Session) -> List[Operation]:
        return operation_crud.get_all(db)

    def get_operation(self, db: Session, operation_id: int) -> Operation:
        operation = operation_crud.get(db, operation_id)
        if not operation:
            raise NotFoundError(f"Operation with ID {operation_id} not found")
        return operation

    def create_operation(self, db: Session, obj_in: OperationCreate, user_id: Optional[int] = None) -> Operation:
        with transaction(db):
            if operation_crud.get_by_code(db, code=obj_in.code):
                raise ConflictError(f"Operation with code '{obj_in.code}' already exists")
            operation = operation_crud.create(db, obj_in=obj_in, user_id=user_id)
        db.refresh(operation)
        logger.info(f"Operation created: id={operation.operation_id}, code={operation.code}")
        return operation

    def update_operation(self, db: Session, operation_id: int, obj_in: OperationUpdate, user_id: Optional[int] = None) -> Operation:
        with transaction(db):
            operation = self.get_operation(db, operation_id)
            if obj_in.code is not None and obj_in.code != operation.code:
                if operation_crud.get_by_code(db, code=obj_in.code):
                    raise ConflictError(f"Operation with code '{obj_in.code}' already exists")
                if permission_crud.count(db, filters={"operation_id": operation_id}):
                    raise BadRequestError(
                        "Operation code cannot change while permissions reference it",
                        details={"operation_id": operation_id},
                    )
            operation = operation_crud.update(db, db_obj=operation, obj_in=obj_in, user_id=user_id)
        db.refresh(operation)
        logger.info(f"Operation updated: id={operation_id}")
        return operation

    def toggle_operation_active(self, db: Session, operation_id: int, user_id: Optional[int] = None) -> Operation:
        with transaction(db):
            operation = self.get_operation(db, operation_id)
            operation = operation_crud.update(db, db_obj=operation, obj_in={"is_active": not operation.is_active}, user_id=user_id)
        db.refresh(operation)
        logger.info(f"Operation {operation_id} is_active -> {operation.is_active}")
        return operation

    def soft_delete_operation(self, db: Session, operation_id: int, user_id: Optional[int] = None) -> Operation:
        with transaction(db):
            operation = self.get_operation(db, operation_id)
            removed = permission_crud.soft_remove_by_operation(db, operation_id=operation_id, user_id=user_id)
            operation_crud.soft_remove(db, db_obj=operation, user_id=user_id)
        logger.info(f"Operation {operation_id} deleted along with {removed} permission(s)")
        return operation

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------
    def list_permissions(self, db: Session) -> List[Permission]:
        return permission_crud.get_all(db)


catalog_service = CatalogService()
