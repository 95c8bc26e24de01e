"""Amazon SES adapter: implements EmailSender with boto3."""

import logging

import boto3  # type: ignore[import-untyped]
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore[import-untyped]

from port.email_sender import EmailDeliveryError

logger = logging.getLogger(__name__)

logging.getLogger("botocore").setLevel(logging.WARNING)


class SESEmailSender:
    """Send HTML email through Amazon SES."""

    def __init__(
        self,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client=None,
    ):
        self._client = client or boto3.client(
            "ses",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def send(self, from_address: str, to: list[str], subject: str, body: str) -> None:
        try:
            response = self._client.send_email(
                Source=from_address,
                Destination={"ToAddresses": list(to)},
                Message={
                    "Subject": {"Charset": "UTF-8", "Data": subject},
                    "Body": {"Html": {"Charset": "UTF-8", "Data": body}},
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise EmailDeliveryError(f"SES send_email failed: {e}") from e

        logger.info("Email sent", extra={"messageId": response.get("MessageId"), "recipients": len(to)})
