# backend/modules/payments/api/payment_endpoints.py

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from backend.core.auth import Caller, UserRole, get_current_user, require_roles
from backend.core.database import get_db
from ..schemas.payment_schemas import (
    PaymentCreate, PaymentResponse, GatewayOrderResponse, GatewayPublicConfig
)
from ..services.payment_service import PaymentService, get_payment_gateway


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payments", tags=["payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def process_payment(
    payment_data: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """
    Record the payment for an order

    Cash on delivery stays pending; online methods without a transaction id
    get a gateway order to complete on the client.
    """
    return service.process_payment(caller, payment_data)


@router.get("/order/{order_id}", response_model=PaymentResponse)
def get_payment_by_order(
    order_id: int = Path(..., description="Order ID"),
    service: PaymentService = Depends(get_payment_service),
    caller: Caller = Depends(get_current_user),
):
    return service.get_payment_by_order(caller, order_id)


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
def update_payment_status(
    payment_id: int = Path(..., description="Payment ID"),
    new_status: str = Query(..., alias="status"),
    service: PaymentService = Depends(get_payment_service),
    caller: Caller = Depends(require_roles([UserRole.ADMIN])),
):
    """Force a payment into a given status"""
    return service.update_payment_status(caller, payment_id, new_status)


@router.post("/razorpay/order/{order_id}", response_model=GatewayOrderResponse)
def create_gateway_order(
    order_id: int = Path(..., description="Order ID"),
    service: PaymentService = Depends(get_payment_service),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """Create a Razorpay order for client-side checkout"""
    return service.create_gateway_order(caller, order_id)


@router.post("/razorpay/verify/{payment_id}", response_model=PaymentResponse)
def verify_gateway_payment(
    payment_id: int = Path(..., description="Payment ID"),
    razorpay_order_id: Optional[str] = Query(None, alias="razorpayOrderId"),
    razorpay_payment_id: Optional[str] = Query(None, alias="razorpayPaymentId"),
    razorpay_signature: Optional[str] = Query(None, alias="razorpaySignature"),
    service: PaymentService = Depends(get_payment_service),
    caller: Caller = Depends(require_roles([UserRole.CUSTOMER])),
):
    """Verify the checkout signature and capture the payment"""
    return service.verify_gateway_payment(
        caller, payment_id, razorpay_order_id, razorpay_payment_id, razorpay_signature
    )


@router.get("/razorpay/config", response_model=GatewayPublicConfig)
def get_gateway_config():
    """Public gateway key for the checkout widget"""
    return get_payment_gateway().get_public_config()
