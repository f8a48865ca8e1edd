from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.database.session import get_db
from app.seed.seed_data import migrate_permissions, seed_all
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

logger = get_logger(__name__)

router = APIRouter(prefix="/seeder", tags=["Seeder"])


@router.post("/seed", response_model=dict)
def seed(db: Session = Depends(get_db)):
    """
    Seed the super admin, modules, operations, permissions, default roles and plans.

    Open so a fresh install can be bootstrapped; running it again only
    reports what already exists.
    """
    result = seed_all(db)
    return ResponseWrapper.success(data=result["details"], message=result["message"])


@router.post("/migrate-permissions", response_model=dict)
def migrate(db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    """Rebuild the catalog under the current code format. Every role ends up with every permission."""
    logger.warning(f"Permission migration requested by user {user_data['user_id']}")
    result = migrate_permissions(db)
    return ResponseWrapper.success(data=result["details"], message=result["message"])
