from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.iam import Module
from app.schemas.iam import ModuleCreate, ModuleUpdate
from app.crud.base import CRUDBase


class CRUDModule(CRUDBase[Module, ModuleCreate, ModuleUpdate]):
    def get_by_code(self, db: Session, *, code: str) -> Optional[Module]:
        return self.query(db).filter(Module.code == code).first()

    def get_all(self, db: Session) -> List[Module]:
        return self.get_multi(db, order_by=Module.code)


module_crud = CRUDModule(Module)
