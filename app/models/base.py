from sqlalchemy import Column, Integer, DateTime

from common_utils import utcnow


class AuditMixin:
    """
    Audit and soft-delete columns carried by every entity.

    ``created_by``/``updated_by``/``deleted_by`` hold the acting user id and are
    stamped explicitly by the service layer. ``deleted_at`` marks a soft delete.
    """

    created_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)
    deleted_by = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
