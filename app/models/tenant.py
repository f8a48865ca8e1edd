from sqlalchemy import Column, Integer, String, Boolean, Text, JSON
from app.database.session import Base
from app.models.base import AuditMixin
from sqlalchemy.orm import relationship

class Tenant(AuditMixin, Base):
    __tablename__ = "tenants"
    __table_args__ = {'extend_existing': True}

    tenant_id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(20))
    address = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    # External database integration, opaque to the RBAC core
    external_db_config = Column(JSON, nullable=True)

    # Relationships
    roles = relationship("Role", back_populates="tenant")
    users = relationship("User", back_populates="tenant")
