import enum

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, Index, text
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.base import AuditMixin


class SubscriptionStatusEnum(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class Subscription(AuditMixin, Base):
    __tablename__ = "subscriptions"

    subscription_id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False, index=True)
    status = Column(
        Enum(SubscriptionStatusEnum, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubscriptionStatusEnum.ACTIVE,
        index=True,
    )

    tenant = relationship("Tenant")
    plan = relationship("Plan", lazy="joined")

    # At most one live subscription per tenant, enforced by the store
    __table_args__ = (
        Index(
            "uq_subscription_tenant_live", "tenant_id", unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
