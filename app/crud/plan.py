from typing import List, Optional
from sqlalchemy.orm import Session
from app.models import Plan
from app.schemas.plan import PlanCreate, PlanUpdate
from app.crud.base import CRUDBase


class CRUDPlan(CRUDBase[Plan, PlanCreate, PlanUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[Plan]:
        return self.query(db).filter(Plan.name == name).first()

    def get_all(self, db: Session) -> List[Plan]:
        return self.get_multi(db, order_by=Plan.created_at.desc())


plan_crud = CRUDPlan(Plan)
