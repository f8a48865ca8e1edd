from dataclasses import dataclass
from typing import Union

from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey, Table, and_
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.base import AuditMixin
from app.models.iam.permission import Permission

# Association table for Role-Permission many-to-many relationship
role_permission = Table(
    'iam_role_permissions',
    Base.metadata,
    Column('role_id', Integer, ForeignKey('iam_roles.role_id', ondelete="CASCADE"), primary_key=True),
    Column('permission_id', Integer, ForeignKey('iam_permissions.permission_id', ondelete="CASCADE"), primary_key=True)
)


@dataclass(frozen=True)
class SystemScope:
    """System-wide template role, not bound to a tenant or a billing plan."""


@dataclass(frozen=True)
class TenantScope:
    """Role private to one tenant; its permissions are gated by the tenant's plan."""
    tenant_id: int


RoleScope = Union[SystemScope, TenantScope]


class Role(AuditMixin, Base):
    __tablename__ = "iam_roles"

    role_id = Column(Integer, primary_key=True, index=True)
    # NULL marks a system template role, see ``scope``
    tenant_id = Column(Integer, ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    # Soft-deleted permissions drop out of every role
    permissions = relationship(
        "Permission",
        secondary=role_permission,
        primaryjoin=lambda: Role.role_id == role_permission.c.role_id,
        secondaryjoin=lambda: and_(
            Permission.permission_id == role_permission.c.permission_id,
            Permission.deleted_at.is_(None),
        ),
        lazy="selectin",
        order_by=lambda: Permission.code,
    )
    tenant = relationship("Tenant", back_populates="roles")

    @property
    def scope(self) -> RoleScope:
        if self.tenant_id is None:
            return SystemScope()
        return TenantScope(tenant_id=self.tenant_id)

    @property
    def permission_codes(self):
        return [p.code for p in self.permissions]
