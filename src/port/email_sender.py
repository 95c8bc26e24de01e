"""Email port: outbound interface for transactional email."""

from typing import Protocol


class EmailDeliveryError(Exception):
    """The email provider did not accept the message."""


class EmailSender(Protocol):
    def send(self, from_address: str, to: list[str], subject: str, body: str) -> None:
        """Send an HTML email. Raise EmailDeliveryError on failure."""
        ...
