"""Tests for environment-backed settings."""

import os
import unittest
from unittest.mock import patch

from utils.config import Settings, get_settings


class TestSettings(unittest.TestCase):

    def setUp(self):
        get_settings.cache_clear()

    def tearDown(self):
        get_settings.cache_clear()

    def test_email_from_header(self):
        settings = Settings(email_from_address='support@example.com', email_from_name='Async')
        self.assertEqual(settings.email_from, 'Async <support@example.com>')

    def test_list_ids_empty_without_audience(self):
        self.assertEqual(Settings(email_from_address='a@x.com').mailchimp_list_ids, {})

    def test_list_ids_keyed_by_signup_list_name(self):
        settings = Settings(
            email_from_address='a@x.com',
            signup_list_name='beta',
            mailchimp_signups_list_id='abc123',
        )
        self.assertEqual(settings.mailchimp_list_ids, {'beta': 'abc123'})

    @patch.dict(os.environ, {
        'EMAIL_SUPPORT_FROM_ADDRESS': 'support@example.com',
        'STRIPE_SECRET_KEY': 'sk_test_1',
        'MAILCHIMP_API_KEY': '',
        'LOG_LEVEL': 'debug',
    })
    def test_get_settings_reads_environment(self):
        settings = get_settings()

        self.assertEqual(settings.email_from_address, 'support@example.com')
        self.assertEqual(settings.stripe_secret_key, 'sk_test_1')
        self.assertIsNone(settings.mailchimp_api_key)
        self.assertEqual(settings.log_level, 'DEBUG')

    def test_get_settings_is_cached(self):
        self.assertIs(get_settings(), get_settings())


if __name__ == '__main__':
    unittest.main()
