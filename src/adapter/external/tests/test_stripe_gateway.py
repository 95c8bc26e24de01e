"""Tests for StripePaymentGateway with the Stripe SDK mocked out."""

import unittest
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import patch

import stripe

from adapter.external.stripe_gateway import StripePaymentGateway
from port.payment_gateway import PaymentDeclinedError, PaymentGatewayError

CUSTOMER = SimpleNamespace(
    id='cus_1',
    created=1700000000,
    currency='usd',
    default_source='card_1',
    description='Customer for account acc-1',
)

CARD = SimpleNamespace(
    id='card_1', brand='Visa', funding='credit', country='US',
    last4='4242', exp_month=12, exp_year=2030,
)


class TestStripePaymentGateway(unittest.TestCase):

    def setUp(self):
        self.gateway = StripePaymentGateway('sk_test_123')

    @patch('adapter.external.stripe_gateway.stripe.Customer.create')
    def test_create_customer(self, mock_create):
        mock_create.return_value = CUSTOMER

        profile = self.gateway.create_customer('tok_visa', 'a@x.com', 'acc-1')

        mock_create.assert_called_once_with(
            description='Customer for account acc-1',
            email='a@x.com',
            source='tok_visa',
            metadata={'account_id': 'acc-1'},
            api_key='sk_test_123',
        )
        self.assertEqual(profile.id, 'cus_1')
        self.assertEqual(profile.default_source, 'card_1')
        self.assertEqual(profile.created_at, datetime.fromtimestamp(1700000000, tz=timezone.utc))

    @patch('adapter.external.stripe_gateway.stripe.Customer.create')
    def test_create_customer_passes_idempotency_key(self, mock_create):
        mock_create.return_value = CUSTOMER

        self.gateway.create_customer('tok_visa', 'a@x.com', 'acc-1', idempotency_key='key-1')

        self.assertEqual(mock_create.call_args.kwargs['idempotency_key'], 'key-1')

    @patch('adapter.external.stripe_gateway.stripe.Customer.create')
    def test_expanded_default_source_is_reduced_to_id(self, mock_create):
        mock_create.return_value = SimpleNamespace(id='cus_1', default_source=CARD)

        profile = self.gateway.create_customer('tok_visa', 'a@x.com', 'acc-1')

        self.assertEqual(profile.default_source, 'card_1')
        self.assertIsNone(profile.created_at)

    @patch('adapter.external.stripe_gateway.stripe.Customer.retrieve_source')
    def test_retrieve_payment_method(self, mock_retrieve):
        mock_retrieve.return_value = CARD

        method = self.gateway.retrieve_payment_method('cus_1', 'card_1')

        mock_retrieve.assert_called_once_with('cus_1', 'card_1', api_key='sk_test_123')
        self.assertEqual(method.last4, '4242')
        self.assertEqual(method.exp_year, 2030)

    @patch('adapter.external.stripe_gateway.stripe.Customer.create_source')
    def test_create_payment_method(self, mock_create_source):
        mock_create_source.return_value = CARD

        method = self.gateway.create_payment_method('cus_1', 'tok_mc')

        mock_create_source.assert_called_once_with('cus_1', source='tok_mc', api_key='sk_test_123')
        self.assertEqual(method.id, 'card_1')

    @patch('adapter.external.stripe_gateway.stripe.Customer.modify')
    def test_update_default_payment_method(self, mock_modify):
        mock_modify.return_value = CUSTOMER

        profile = self.gateway.update_default_payment_method('cus_1', 'card_1')

        mock_modify.assert_called_once_with('cus_1', default_source='card_1', api_key='sk_test_123')
        self.assertEqual(profile.default_source, 'card_1')

    @patch('adapter.external.stripe_gateway.stripe.Customer.create')
    def test_card_error_maps_to_declined(self, mock_create):
        mock_create.side_effect = stripe.CardError('Your card was declined.', 'source', 'card_declined')

        with self.assertRaises(PaymentDeclinedError):
            self.gateway.create_customer('tok_bad', 'a@x.com', 'acc-1')

    @patch('adapter.external.stripe_gateway.stripe.Customer.modify')
    def test_stripe_error_maps_to_gateway_error(self, mock_modify):
        mock_modify.side_effect = stripe.APIConnectionError('connection reset')

        with self.assertRaises(PaymentGatewayError) as ctx:
            self.gateway.update_default_payment_method('cus_1', 'card_1')
        self.assertNotIsInstance(ctx.exception, PaymentDeclinedError)

    @patch('adapter.external.stripe_gateway.stripe.Customer.create')
    def test_unconfigured_gateway_fails_without_calling_stripe(self, mock_create):
        gateway = StripePaymentGateway(None)

        with self.assertRaises(PaymentGatewayError):
            gateway.create_customer('tok_visa', 'a@x.com', 'acc-1')
        mock_create.assert_not_called()


if __name__ == '__main__':
    unittest.main()
