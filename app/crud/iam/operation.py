from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.iam import Operation
from app.schemas.iam import OperationCreate, OperationUpdate
from app.crud.base import CRUDBase


class CRUDOperation(CRUDBase[Operation, OperationCreate, OperationUpdate]):
    def get_by_code(self, db: Session, *, code: str) -> Optional[Operation]:
        return self.query(db).filter(Operation.code == code).first()

    def get_all(self, db: Session) -> List[Operation]:
        return self.get_multi(db, order_by=Operation.code)


operation_crud = CRUDOperation(Operation)
