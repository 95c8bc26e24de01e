"""Mailing list port: outbound interface for newsletter subscriptions."""

from typing import Protocol


class MailingListError(Exception):
    """Subscription request failed."""


class MailingList(Protocol):
    def subscribe(self, email: str, list_name: str) -> None:
        """Subscribe email to the named list. Raise MailingListError on failure."""
        ...
