from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models import Subscription, SubscriptionStatusEnum
from app.schemas.subscription import SubscriptionCreate, SubscriptionUpdate
from app.crud.base import CRUDBase
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class CRUDSubscription(CRUDBase[Subscription, SubscriptionCreate, SubscriptionUpdate]):
    def get_by_tenant(self, db: Session, *, tenant_id: int) -> Optional[Subscription]:
        return self.query(db).filter(Subscription.tenant_id == tenant_id).first()

    def expire_overdue(self, db: Session, *, now: datetime) -> int:
        """Flip every active subscription whose end date has passed, in one UPDATE."""
        count = (
            self.query(db)
            .filter(
                Subscription.status == SubscriptionStatusEnum.ACTIVE,
                Subscription.end_date <= now,
            )
            .update(
                {"status": SubscriptionStatusEnum.EXPIRED, "updated_at": now},
                synchronize_session="fetch",
            )
        )
        logger.debug(f"expire_overdue(now={now}) affected {count} rows")
        return count

    def get_expiring(self, db: Session, *, now: datetime, until: datetime) -> List[Subscription]:
        return (
            self.query(db)
            .filter(
                Subscription.status == SubscriptionStatusEnum.ACTIVE,
                Subscription.end_date > now,
                Subscription.end_date <= until,
            )
            .order_by(Subscription.end_date)
            .all()
        )


subscription_crud = CRUDSubscription(Subscription)
