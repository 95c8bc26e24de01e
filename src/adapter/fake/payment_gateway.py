"""In-memory implementation of PaymentGateway for testing."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.account import PaymentMethod, PaymentProfile
from port.payment_gateway import PaymentGatewayError


class FakePaymentGateway:
    """Mimics processor customers and cards. Set fail_on to a method name to make it raise."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.customers: dict[str, PaymentProfile] = {}
        self.methods: dict[str, dict[str, PaymentMethod]] = {}
        self.calls: list[str] = []
        self.idempotency_keys: list[str | None] = []
        self._ids = itertools.count(1)

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise PaymentGatewayError(f"{name} failed")

    def _card(self, token: str) -> PaymentMethod:
        return PaymentMethod(
            id=f"card_{next(self._ids)}",
            brand='Visa',
            funding='credit',
            country='US',
            last4=token[-4:].rjust(4, '0'),
            exp_month=12,
            exp_year=2030,
        )

    def create_customer(
        self,
        token: str,
        email: str,
        account_id: str,
        idempotency_key: str | None = None,
    ) -> PaymentProfile:
        self._call('create_customer')
        self.idempotency_keys.append(idempotency_key)
        card = self._card(token)
        customer = PaymentProfile(
            id=f"cus_{next(self._ids)}",
            created_at=datetime.now(timezone.utc),
            currency='usd',
            default_source=card.id,
            description=f"Customer for account {account_id}",
        )
        self.customers[customer.id] = customer
        self.methods[customer.id] = {card.id: card}
        return customer

    def retrieve_payment_method(self, customer_id: str, method_id: str) -> PaymentMethod:
        self._call('retrieve_payment_method')
        try:
            return self.methods[customer_id][method_id]
        except KeyError:
            raise PaymentGatewayError("No such source") from None

    def create_payment_method(self, customer_id: str, token: str) -> PaymentMethod:
        self._call('create_payment_method')
        if customer_id not in self.customers:
            raise PaymentGatewayError("No such customer")
        card = self._card(token)
        self.methods[customer_id][card.id] = card
        return card

    def update_default_payment_method(self, customer_id: str, method_id: str) -> PaymentProfile:
        self._call('update_default_payment_method')
        if method_id not in self.methods.get(customer_id, {}):
            raise PaymentGatewayError("No such source")
        customer = replace(self.customers[customer_id], default_source=method_id)
        self.customers[customer_id] = customer
        return customer
