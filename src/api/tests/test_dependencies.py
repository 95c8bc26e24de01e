"""Unit tests for API dependencies: service and identity verifier wiring.

Tests focus on:
- 503 when MongoDB client is None
- Correct database name is used
- AccountService receives Mongo repositories and configured adapters
"""

import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from api.dependencies import DATABASE_NAME, get_account_service, get_identity_verifier
from adapter.external.google_identity import GoogleIdentityVerifier
from adapter.external.mailchimp import MailchimpMailingList
from adapter.external.stripe_gateway import StripePaymentGateway
from adapter.mongodb.account_repository import MongoAccountRepository
from adapter.mongodb.invitation_repository import MongoInvitationRepository
from adapter.mongodb.team_repository import MongoTeamRepository
from services.account_service import AccountService
from utils.config import Settings


def _connected_client():
    client = MagicMock()
    client.__getitem__.return_value = MagicMock()
    return client


class TestGetAccountService(unittest.TestCase):

    def setUp(self):
        self.settings = Settings(
            email_from_address='support@example.com',
            email_from_name='Async',
            mailchimp_api_key='key-us1',
            mailchimp_region='us1',
            mailchimp_signups_list_id='abc123',
            stripe_secret_key='sk_test_1',
        )

    @patch('api.dependencies.SESEmailSender')
    @patch('api.dependencies.get_settings')
    @patch('api.dependencies.get_mongodb_client')
    def test_wires_service(self, mock_get_client, mock_settings, mock_ses):
        mock_get_client.return_value = _connected_client()
        mock_settings.return_value = self.settings

        service = get_account_service()

        self.assertIsInstance(service, AccountService)
        self.assertIsInstance(service.accounts, MongoAccountRepository)
        self.assertIsInstance(service.teams, MongoTeamRepository)
        self.assertIsInstance(service.invitations, MongoInvitationRepository)
        self.assertIsInstance(service.payments, StripePaymentGateway)
        self.assertEqual(service.payments.api_key, 'sk_test_1')
        self.assertIsInstance(service.mailing_list, MailchimpMailingList)
        self.assertEqual(service.mailing_list.list_ids, {'signups': 'abc123'})
        self.assertIs(service.email_sender, mock_ses.return_value)
        self.assertEqual(service.email_from, 'Async <support@example.com>')
        self.assertEqual(service.signup_list_name, 'signups')
        mock_get_client.return_value.__getitem__.assert_called_with(DATABASE_NAME)

    @patch('api.dependencies.get_mongodb_client')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_client):
        mock_get_client.return_value = None

        with self.assertRaises(HTTPException) as context:
            get_account_service()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")


class TestGetIdentityVerifier(unittest.TestCase):

    @patch('api.dependencies.get_settings')
    def test_uses_configured_client_id(self, mock_settings):
        mock_settings.return_value = Settings(email_from_address='a@x.com', google_client_id='client-1')

        verifier = get_identity_verifier()

        self.assertIsInstance(verifier, GoogleIdentityVerifier)
        self.assertEqual(verifier.client_id, 'client-1')


if __name__ == '__main__':
    unittest.main()
