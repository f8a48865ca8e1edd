from sqlalchemy import Column, Integer, String, Boolean, Text, Index, text
from app.database.session import Base
from app.models.base import AuditMixin

class Module(AuditMixin, Base):
    __tablename__ = "iam_modules"

    module_id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False)  # e.g. "Vendor"
    name = Column(String(100), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    # Code is unique among live rows only
    __table_args__ = (
        Index(
            "uq_module_code_live", "code", unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
