import enum

from sqlalchemy import Column, Integer, String, Boolean, Text, Numeric, ForeignKey, Table, Enum, and_
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.base import AuditMixin
from app.models.iam.module import Module


class BillingCycleEnum(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Association table for Plan-Module many-to-many relationship
plan_module = Table(
    'plan_modules',
    Base.metadata,
    Column('plan_id', Integer, ForeignKey('plans.plan_id', ondelete="CASCADE"), primary_key=True),
    Column('module_id', Integer, ForeignKey('iam_modules.module_id', ondelete="CASCADE"), primary_key=True)
)


class Plan(AuditMixin, Base):
    __tablename__ = "plans"

    plan_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    billing_cycle = Column(
        Enum(BillingCycleEnum, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BillingCycleEnum.MONTHLY,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    # Soft-deleted modules are no longer unlocked by any plan
    modules = relationship(
        "Module",
        secondary=plan_module,
        primaryjoin=lambda: Plan.plan_id == plan_module.c.plan_id,
        secondaryjoin=lambda: and_(
            Module.module_id == plan_module.c.module_id,
            Module.deleted_at.is_(None),
        ),
        lazy="selectin",
        order_by=lambda: Module.code,
    )

    @property
    def module_ids(self):
        return {m.module_id for m in self.modules}
