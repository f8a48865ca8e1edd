from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.database.session import get_db
from app.schemas.subscription import SubscriptionCreate, SubscriptionResponse, SubscriptionUpdate
from app.services.subscription_service import subscription_service
from app.utils.response_utils import ResponseWrapper
from common_utils.auth.permission_checker import SuperAdminOnly

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_subscription(
    subscription: SubscriptionCreate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    """
    Subscribe a tenant to a plan.

    **Status codes:**

    * `201 Created`: Subscription created.
    * `400 Bad Request`: `end_date` is not after `start_date`.
    * `404 Not Found`: Tenant or plan does not exist.
    * `409 Conflict`: The tenant already has a subscription.
    """
    new_subscription = subscription_service.create(db, subscription, user_id=user_data["user_id"])
    return ResponseWrapper.created(
        data=SubscriptionResponse.model_validate(new_subscription),
        message="Subscription created successfully",
    )


@router.get("/", response_model=dict)
def list_subscriptions(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    subscriptions = subscription_service.list(db)
    return ResponseWrapper.success(
        data=[SubscriptionResponse.model_validate(s) for s in subscriptions],
        message="Subscriptions fetched successfully",
    )


@router.get("/expiring/{days}", response_model=dict)
def get_expiring_subscriptions(
    days: int = Path(..., ge=0, le=3650),
    db: Session = Depends(get_db),
    _=Depends(SuperAdminOnly()),
):
    """Active subscriptions whose end date falls within the next `days` days."""
    subscriptions = subscription_service.find_expiring_within(db, days)
    return ResponseWrapper.success(
        data=[SubscriptionResponse.model_validate(s) for s in subscriptions],
        message=f"Subscriptions expiring within {days} days fetched successfully",
    )


@router.post("/sweep", response_model=dict)
def sweep_expired_subscriptions(db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    """Run the expiry sweep now instead of waiting for the scheduled run."""
    count = subscription_service.sweep_expired(db)
    return ResponseWrapper.success(data={"expired": count}, message=f"{count} subscription(s) marked expired")


@router.get("/tenant/{tenant_id}", response_model=dict)
def get_tenant_subscription(tenant_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    subscription = subscription_service.get_by_tenant(db, tenant_id)
    if subscription is None:
        raise NotFoundError(f"Subscription for tenant ID {tenant_id} not found")
    return ResponseWrapper.success(
        data=SubscriptionResponse.model_validate(subscription),
        message="Subscription fetched successfully",
    )


@router.get("/tenant/{tenant_id}/validity", response_model=dict)
def check_tenant_subscription(tenant_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    valid = subscription_service.is_valid(db, tenant_id)
    return ResponseWrapper.success(data={"tenant_id": tenant_id, "is_valid": valid}, message="Subscription checked")


@router.get("/{subscription_id}", response_model=dict)
def get_subscription(subscription_id: int, db: Session = Depends(get_db), _=Depends(SuperAdminOnly())):
    subscription = subscription_service.get(db, subscription_id)
    return ResponseWrapper.success(
        data=SubscriptionResponse.model_validate(subscription),
        message="Subscription fetched successfully",
    )


@router.put("/{subscription_id}", response_model=dict)
def update_subscription(
    subscription_id: int,
    subscription: SubscriptionUpdate,
    db: Session = Depends(get_db),
    user_data=Depends(SuperAdminOnly()),
):
    updated = subscription_service.update(db, subscription_id, subscription, user_id=user_data["user_id"])
    return ResponseWrapper.updated(
        data=SubscriptionResponse.model_validate(updated),
        message="Subscription updated successfully",
    )


@router.delete("/{subscription_id}", response_model=dict)
def delete_subscription(subscription_id: int, db: Session = Depends(get_db), user_data=Depends(SuperAdminOnly())):
    subscription_service.soft_delete(db, subscription_id, user_id=user_data["user_id"])
    return ResponseWrapper.deleted(message="Subscription deleted successfully")
