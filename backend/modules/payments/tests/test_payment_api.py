from fastapi import status

from backend.core.auth import UserRole
from backend.modules.payments.models.payment_models import Payment
from backend.tests.factories import OrderFactory, PaymentFactory


class TestPaymentAPI:
    """Test payment API endpoints"""

    def test_cash_on_delivery(self, client, db_session, headers_for):
        order = OrderFactory()
        headers = headers_for(order.customer_id, UserRole.CUSTOMER)

        response = client.post(
            "/api/payments",
            json={"order_id": order.id, "payment_method": "CASH_ON_DELIVERY"},
            headers=headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["status"] == "PENDING"

        duplicate = client.post(
            "/api/payments",
            json={"order_id": order.id, "payment_method": "CASH_ON_DELIVERY"},
            headers=headers,
        )
        assert duplicate.status_code == status.HTTP_400_BAD_REQUEST
        assert duplicate.json()["error"] == "Payment already processed for this order"
        assert db_session.query(Payment).count() == 1

    def test_upi_checkout_and_verify(self, client, db_session, headers_for):
        """Test the online flow from gateway order to verified payment"""
        order = OrderFactory()
        headers = headers_for(order.customer_id, UserRole.CUSTOMER)

        payment = client.post(
            "/api/payments", json={"order_id": order.id, "payment_method": "UPI"}, headers=headers
        ).json()
        gateway_order_id = payment["transaction_id"]

        response = client.post(
            f"/api/payments/razorpay/verify/{payment['id']}",
            params={
                "razorpayOrderId": gateway_order_id,
                "razorpayPaymentId": "pay_29QQoUBi66xm2f",
                "razorpaySignature": "sig_" + gateway_order_id[:8] + "pay_29QQ",
            },
            headers=headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["transaction_id"] == "pay_29QQoUBi66xm2f"

    def test_verify_without_signature(self, client, db_session, headers_for):
        order = OrderFactory()
        payment = PaymentFactory(order=order, transaction_id="order_abc")

        response = client.post(
            f"/api/payments/razorpay/verify/{payment.id}",
            params={"razorpayOrderId": "order_abc", "razorpayPaymentId": "pay_1"},
            headers=headers_for(order.customer_id, UserRole.CUSTOMER),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        db_session.refresh(payment)
        assert payment.status.value == "PENDING"
        assert payment.transaction_id == "order_abc"

    def test_create_gateway_order(self, client, db_session, headers_for):
        order = OrderFactory()

        response = client.post(
            f"/api/payments/razorpay/order/{order.id}",
            headers=headers_for(order.customer_id, UserRole.CUSTOMER),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"].startswith("order_")
        assert data["amount"] == 26000
        assert data["currency"] == "INR"

    def test_get_payment_by_order(self, client, db_session, headers_for):
        order = OrderFactory()
        payment = PaymentFactory(order=order)

        response = client.get(
            f"/api/payments/order/{order.id}",
            headers=headers_for(order.customer_id, UserRole.CUSTOMER),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == payment.id

    def test_admin_updates_status(self, client, db_session, headers_for):
        payment = PaymentFactory()

        response = client.patch(
            f"/api/payments/{payment.id}/status?status=FAILED",
            headers=headers_for(1, UserRole.ADMIN),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "FAILED"

    def test_customer_cannot_update_status(self, client, db_session, headers_for):
        payment = PaymentFactory()

        response = client.patch(
            f"/api/payments/{payment.id}/status?status=COMPLETED",
            headers=headers_for(5, UserRole.CUSTOMER),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_gateway_config_is_public(self, client):
        response = client.get("/api/payments/razorpay/config")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["key_id"]
        assert data["currency"] == "INR"
        assert "key_secret" not in data
