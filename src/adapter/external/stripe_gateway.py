"""Stripe adapter: implements PaymentGateway with the Stripe customer/source API."""

import logging
from datetime import datetime, timezone

import stripe

from domain.model.account import PaymentMethod, PaymentProfile
from port.payment_gateway import PaymentDeclinedError, PaymentGatewayError

logger = logging.getLogger(__name__)

logging.getLogger("stripe").setLevel(logging.WARNING)

MAX_NETWORK_RETRIES = 2


def _to_profile(customer) -> PaymentProfile:
    default_source = getattr(customer, "default_source", None)
    if default_source is not None and not isinstance(default_source, str):
        default_source = default_source.id
    created = getattr(customer, "created", None)
    return PaymentProfile(
        id=customer.id,
        created_at=datetime.fromtimestamp(created, tz=timezone.utc) if created else None,
        currency=getattr(customer, "currency", None),
        default_source=default_source,
        description=getattr(customer, "description", None),
    )


def _to_method(card) -> PaymentMethod:
    return PaymentMethod(
        id=card.id,
        brand=getattr(card, "brand", None),
        funding=getattr(card, "funding", None),
        country=getattr(card, "country", None),
        last4=getattr(card, "last4", None),
        exp_month=getattr(card, "exp_month", None),
        exp_year=getattr(card, "exp_year", None),
    )


class StripePaymentGateway:
    """Adapter that implements PaymentGateway using Stripe customers and card sources.

    The API key is passed per request, so several gateways with different
    keys can coexist in one process.
    """

    def __init__(self, api_key: str | None, description_prefix: str = "Customer for account"):
        self.api_key = api_key
        self.description_prefix = description_prefix
        stripe.max_network_retries = MAX_NETWORK_RETRIES

    def _request(self, operation: str, func, *args, **kwargs):
        if not self.api_key:
            raise PaymentGatewayError("Stripe is not configured")
        try:
            return func(*args, api_key=self.api_key, **kwargs)
        except stripe.CardError as e:
            logger.warning("Card declined", extra={"operation": operation, "code": e.code})
            raise PaymentDeclinedError(e.user_message or str(e)) from e
        except stripe.StripeError as e:
            logger.error("Stripe request failed", extra={
                "operation": operation, "error": str(e), "requestId": getattr(e, "request_id", None),
            })
            raise PaymentGatewayError(str(e)) from e

    def create_customer(
        self,
        token: str,
        email: str,
        account_id: str,
        idempotency_key: str | None = None,
    ) -> PaymentProfile:
        kwargs = {"idempotency_key": idempotency_key} if idempotency_key else {}
        customer = self._request(
            "create_customer",
            stripe.Customer.create,
            description=f"{self.description_prefix} {account_id}",
            email=email,
            source=token,
            metadata={"account_id": account_id},
            **kwargs,
        )
        return _to_profile(customer)

    def retrieve_payment_method(self, customer_id: str, method_id: str) -> PaymentMethod:
        card = self._request(
            "retrieve_payment_method",
            stripe.Customer.retrieve_source,
            customer_id,
            method_id,
        )
        return _to_method(card)

    def create_payment_method(self, customer_id: str, token: str) -> PaymentMethod:
        card = self._request(
            "create_payment_method",
            stripe.Customer.create_source,
            customer_id,
            source=token,
        )
        return _to_method(card)

    def update_default_payment_method(self, customer_id: str, method_id: str) -> PaymentProfile:
        customer = self._request(
            "update_default_payment_method",
            stripe.Customer.modify,
            customer_id,
            default_source=method_id,
        )
        return _to_profile(customer)
