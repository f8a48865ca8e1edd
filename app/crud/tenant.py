from app.core.logging_config import get_logger
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_
from app.models import Tenant
from app.schemas.tenant import TenantCreate, TenantUpdate
from app.crud.base import CRUDBase

logger = get_logger(__name__)

class CRUDTenant(CRUDBase[Tenant, TenantCreate, TenantUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[Tenant]:
        """Get tenant by contact email, deleted rows included since the column is unique"""
        result = self.query(db, include_deleted=True).filter(Tenant.email == email).first()
        logger.debug(f"get_by_email({email}) returned: {result.tenant_id if result else None}")
        return result

    def search_tenants(
        self, db: Session, *, search_term: str, skip: int = 0, limit: int = 100
    ) -> List[Tenant]:
        """Search live tenants by company name or email"""
        search_pattern = f"%{search_term}%"
        return self.query(db).filter(
            or_(
                Tenant.company_name.ilike(search_pattern),
                Tenant.email.ilike(search_pattern)
            )
        ).order_by(Tenant.tenant_id).offset(skip).limit(limit).all()


tenant_crud = CRUDTenant(Tenant)
