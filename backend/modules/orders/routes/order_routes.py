# backend/modules/orders/routes/order_routes.py

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from backend.core.auth import Caller, UserRole, get_current_user, require_roles
from backend.core.database import get_db
from backend.core.pagination import PageParams, page_params
from ..schemas.order_schemas import OrderOut, OrderPage, PlaceOrderRequest
from ..services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def place_order(
    request: PlaceOrderRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """Place an order for menu items from a single restaurant."""
    return OrderService(db).place_order(caller, request)


@router.get("/my-orders", response_model=OrderPage)
def get_my_orders(
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """List the caller's orders, newest first."""
    items, total = OrderService(db).get_my_orders(caller, params.offset, params.size)
    return OrderPage.build(items, total, params)


@router.get("/restaurant/{restaurant_id}", response_model=OrderPage)
def get_restaurant_orders(
    restaurant_id: int = Path(..., description="Restaurant ID"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    caller: Caller = Depends(
        require_roles([UserRole.ADMIN, UserRole.RESTAURANT_OWNER])
    ),
):
    items, total = OrderService(db).get_restaurant_orders(
        caller, restaurant_id, params.offset, params.size
    )
    return OrderPage.build(items, total, params)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int = Path(..., description="Order ID"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_user),
):
    return OrderService(db).get_order(caller, order_id)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int = Path(..., description="Order ID"),
    new_status: str = Query(..., alias="status", description="Target order status"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(
        require_roles(
            [UserRole.ADMIN, UserRole.RESTAURANT_OWNER, UserRole.DELIVERY_PARTNER]
        )
    ),
):
    """Advance an order along its lifecycle."""
    return OrderService(db).update_order_status(caller, order_id, new_status)


@router.patch("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int = Path(..., description="Order ID"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER, UserRole.ADMIN])),
):
    """Cancel an order that has not started preparation."""
    return OrderService(db).cancel_order(caller, order_id)
