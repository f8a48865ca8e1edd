from sqlalchemy import Column, Integer, String, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from app.database.session import Base
from app.models.base import AuditMixin


def build_permission_code(module_code: str, operation_code: str) -> str:
    return f"{module_code}:{operation_code}"


class Permission(AuditMixin, Base):
    __tablename__ = "iam_permissions"

    permission_id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("iam_modules.module_id", ondelete="CASCADE"), nullable=False, index=True)
    operation_id = Column(Integer, ForeignKey("iam_operations.operation_id", ondelete="CASCADE"), nullable=False)
    # "<ModuleCode>:<OperationCode>", never renamed in place
    code = Column(String(100), nullable=False)

    module = relationship("Module", lazy="joined")
    operation = relationship("Operation", lazy="joined")

    # Code is unique among live rows only
    __table_args__ = (
        Index(
            "uq_permission_code_live", "code", unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    @property
    def module_code(self):
        return self.module.code

    @property
    def operation_code(self):
        return self.operation.code
