# backend/modules/deliveries/routes/delivery_routes.py

from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from backend.core.auth import Caller, UserRole, require_roles
from backend.core.database import get_db
from ..schemas.delivery_schemas import DeliveryOut
from ..services.delivery_service import DeliveryService

router = APIRouter(prefix="/api/deliveries", tags=["Deliveries"])


@router.post("/assign", response_model=DeliveryOut)
def assign_delivery(
    order_id: int = Query(..., alias="orderId"),
    delivery_partner_id: int = Query(..., alias="deliveryPartnerId"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(
        require_roles([UserRole.ADMIN, UserRole.RESTAURANT_OWNER])
    ),
):
    """Assign a delivery partner to an order."""
    return DeliveryService(db).assign_delivery(caller, order_id, delivery_partner_id)


@router.put("/{delivery_id}/pickup", response_model=DeliveryOut)
def mark_picked_up(
    delivery_id: int = Path(..., description="Delivery ID"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.DELIVERY_PARTNER])),
):
    return DeliveryService(db).mark_picked_up(caller, delivery_id)


@router.put("/{delivery_id}/deliver", response_model=DeliveryOut)
def mark_delivered(
    delivery_id: int = Path(..., description="Delivery ID"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.DELIVERY_PARTNER])),
):
    return DeliveryService(db).mark_delivered(caller, delivery_id)


@router.get("/partner/{partner_id}", response_model=List[DeliveryOut])
def get_partner_deliveries(
    partner_id: int = Path(..., description="Delivery partner user ID"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(
        require_roles([UserRole.DELIVERY_PARTNER, UserRole.ADMIN])
    ),
):
    """List a partner's deliveries, most recent assignment first."""
    return DeliveryService(db).get_partner_deliveries(caller, partner_id)
