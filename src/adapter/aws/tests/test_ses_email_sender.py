"""Tests for SESEmailSender with an injected SES client."""

import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from adapter.aws.ses_email_sender import SESEmailSender
from port.email_sender import EmailDeliveryError


class TestSESEmailSender(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.client.send_email.return_value = {'MessageId': 'msg-1'}
        self.sender = SESEmailSender('us-east-1', client=self.client)

    def test_send_builds_html_message(self):
        self.sender.send('Support <support@x.com>', ['a@x.com'], 'Hi', '<p>Hello</p>')

        self.client.send_email.assert_called_once_with(
            Source='Support <support@x.com>',
            Destination={'ToAddresses': ['a@x.com']},
            Message={
                'Subject': {'Charset': 'UTF-8', 'Data': 'Hi'},
                'Body': {'Html': {'Charset': 'UTF-8', 'Data': '<p>Hello</p>'}},
            },
        )

    def test_client_error_raises_delivery_error(self):
        self.client.send_email.side_effect = ClientError(
            {'Error': {'Code': 'MessageRejected', 'Message': 'Email address is not verified.'}},
            'SendEmail',
        )

        with self.assertRaises(EmailDeliveryError) as ctx:
            self.sender.send('support@x.com', ['a@x.com'], 'Hi', '<p>Hello</p>')
        self.assertIn('MessageRejected', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
