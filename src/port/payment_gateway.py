"""Payment gateway port: outbound interface to the payment processor."""

from typing import Protocol

from domain.model.account import PaymentMethod, PaymentProfile


class PaymentGatewayError(Exception):
    """Base exception for payment gateway errors."""


class PaymentDeclinedError(PaymentGatewayError):
    """The processor rejected the card or token."""


class PaymentGateway(Protocol):
    """Port for customer and payment-method operations.

    Calls are not idempotent. Callers that need exactly-once semantics
    pass an idempotency key where the method accepts one.
    """

    def create_customer(
        self,
        token: str,
        email: str,
        account_id: str,
        idempotency_key: str | None = None,
    ) -> PaymentProfile: ...

    def retrieve_payment_method(self, customer_id: str, method_id: str) -> PaymentMethod: ...

    def create_payment_method(self, customer_id: str, token: str) -> PaymentMethod: ...

    def update_default_payment_method(self, customer_id: str, method_id: str) -> PaymentProfile: ...
