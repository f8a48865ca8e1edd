from sqlalchemy import Column, Integer, String, Boolean, Index, text
from app.database.session import Base
from app.models.base import AuditMixin

class Operation(AuditMixin, Base):
    __tablename__ = "iam_operations"

    operation_id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False)  # Create, Read, Update, Delete, List, ...
    name = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index(
            "uq_operation_code_live", "code", unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
