"""Tests for the health endpoint."""

import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent.parent))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import app
from utils.config import Settings


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_settings')
    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_with_integrations(self, mock_get_client, mock_settings):
        mock_get_client.return_value = MagicMock()
        mock_settings.return_value = Settings(
            email_from_address='support@example.com', stripe_secret_key='sk_test_1',
        )

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["integrations"], {"google": False, "stripe": True, "email": True, "mailchimp": False})

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_without_mongodb(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")

    @patch('api.routes.health.get_mongodb_client')
    def test_ping_error_is_reported(self, mock_get_client):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError('timeout')
        mock_get_client.return_value = client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("timeout", response.json()["services"]["mongodb"]["message"])


if __name__ == '__main__':
    unittest.main()
