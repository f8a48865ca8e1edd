"""
Subscription ledger: binds a tenant to a plan for a validity window.

A tenant holds at most one live subscription row. Validity means
``status == active and end_date > now``. Datetimes are compared as naive UTC.
"""
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.core.logging_config import get_logger
from app.crud.plan import plan_crud
from app.crud.subscription import subscription_crud
from app.crud.tenant import tenant_crud
from app.database.session import transaction
from app.models import Subscription, SubscriptionStatusEnum
from app.schemas.subscription import SubscriptionCreate, SubscriptionUpdate
from common_utils import to_naive_utc, utcnow

logger = get_logger(__name__)


def _is_current(subscription: Subscription, now: datetime) -> bool:
    return subscription.status == SubscriptionStatusEnum.ACTIVE and subscription.end_date > now


class SubscriptionService:

    def list(self, db: Session) -> List[Subscription]:
        return subscription_crud.get_multi(db, order_by=Subscription.created_at.desc())

    def get(self, db: Session, subscription_id: int) -> Subscription:
        subscription = subscription_crud.get(db, subscription_id)
        if not subscription:
            raise NotFoundError(f"Subscription with ID {subscription_id} not found")
        return subscription

    def get_by_tenant(self, db: Session, tenant_id: int) -> Optional[Subscription]:
        return subscription_crud.get_by_tenant(db, tenant_id=tenant_id)

    def create(self, db: Session, obj_in: SubscriptionCreate, user_id: Optional[int] = None) -> Subscription:
        """
        Create the tenant's subscription.

        Raises:
            NotFoundError: tenant or plan does not exist
            ConflictError: the tenant already has a subscription, whatever its status
            BadRequestError: end date is not after start date
        """
        start_date = to_naive_utc(obj_in.start_date)
        end_date = to_naive_utc(obj_in.end_date)

        with transaction(db):
            if not tenant_crud.get(db, obj_in.tenant_id):
                raise NotFoundError(f"Tenant with ID {obj_in.tenant_id} not found")
            if not plan_crud.get(db, obj_in.plan_id):
                raise NotFoundError(f"Plan with ID {obj_in.plan_id} not found")
            if subscription_crud.get_by_tenant(db, tenant_id=obj_in.tenant_id):
                raise ConflictError(
                    "Tenant already has a subscription. Update the existing subscription instead.",
                    details={"tenant_id": obj_in.tenant_id},
                )
            if end_date <= start_date:
                raise BadRequestError("End date must be after start date")

            # The partial unique index on tenant_id closes the check-then-insert race;
            # transaction() reports its violation as ConflictError.
            subscription = subscription_crud.create(
                db,
                obj_in={
                    "tenant_id": obj_in.tenant_id,
                    "plan_id": obj_in.plan_id,
                    "start_date": start_date,
                    "end_date": end_date,
                    "status": obj_in.status or SubscriptionStatusEnum.ACTIVE,
                },
                user_id=user_id,
            )
        db.refresh(subscription)
        logger.info(
            f"Subscription created: id={subscription.subscription_id}, tenant={subscription.tenant_id}, "
            f"plan={subscription.plan_id}, ends={subscription.end_date}"
        )
        return subscription

    def update(self, db: Session, subscription_id: int, obj_in: SubscriptionUpdate, user_id: Optional[int] = None) -> Subscription:
        update_data = obj_in.model_dump(exclude_unset=True)
        with transaction(db):
            subscription = self.get(db, subscription_id)

            plan_id = update_data.get("plan_id")
            if plan_id is not None and not plan_crud.get(db, plan_id):
                raise NotFoundError(f"Plan with ID {plan_id} not found")

            for field in ("start_date", "end_date"):
                if update_data.get(field) is not None:
                    update_data[field] = to_naive_utc(update_data[field])
                else:
                    update_data.pop(field, None)
            start_date = update_data.get("start_date", subscription.start_date)
            end_date = update_data.get("end_date", subscription.end_date)
            if end_date <= start_date:
                raise BadRequestError("End date must be after start date")

            subscription = subscription_crud.update(db, db_obj=subscription, obj_in=update_data, user_id=user_id)
        db.refresh(subscription)
        logger.info(f"Subscription {subscription_id} updated: {sorted(update_data)}")
        return subscription

    def soft_delete(self, db: Session, subscription_id: int, user_id: Optional[int] = None) -> Subscription:
        with transaction(db):
            subscription = self.get(db, subscription_id)
            subscription_crud.soft_remove(db, db_obj=subscription, user_id=user_id)
        logger.info(f"Subscription {subscription_id} deleted")
        return subscription

    def is_valid(self, db: Session, tenant_id: int) -> bool:
        """
        Whether the tenant may proceed.

        A tenant with no subscription row at all is let through; a row that is
        not active or whose end date has passed is not.
        """
        subscription = subscription_crud.get_by_tenant(db, tenant_id=tenant_id)
        if subscription is None:
            logger.debug(f"Tenant {tenant_id} has no subscription, treating as valid")
            return True
        return _is_current(subscription, utcnow())

    def get_valid_subscription(self, db: Session, tenant_id: int) -> Optional[Subscription]:
        """The tenant's subscription if it exists and is currently valid, else None."""
        subscription = subscription_crud.get_by_tenant(db, tenant_id=tenant_id)
        if subscription is None or not _is_current(subscription, utcnow()):
            return None
        return subscription

    def sweep_expired(self, db: Session) -> int:
        """Mark every overdue active subscription expired; returns the number of rows changed."""
        with transaction(db):
            count = subscription_crud.expire_overdue(db, now=utcnow())
        if count:
            logger.info(f"Expired {count} subscription(s)")
        return count

    def find_expiring_within(self, db: Session, days: int) -> List[Subscription]:
        now = utcnow()
        return subscription_crud.get_expiring(db, now=now, until=now + timedelta(days=days))


subscription_service = SubscriptionService()
