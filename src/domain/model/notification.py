# domain/model/notification.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from domain.model.account import PublicAccount


class NotificationChannel(str, Enum):
    WELCOME_EMAIL = 'welcome_email'
    MAILING_LIST = 'mailing_list'


class NotificationStatus(str, Enum):
    """Outcome of a best-effort side effect."""
    SENT = 'sent'
    SKIPPED = 'skipped'
    FAILED = 'failed'


@dataclass(frozen=True)
class NotificationOutcome:
    """Observable result of one notification attempt. Never raised, only returned."""
    channel: NotificationChannel
    status: NotificationStatus
    reason: str | None = None

    @staticmethod
    def sent(channel: NotificationChannel) -> NotificationOutcome:
        return NotificationOutcome(channel, NotificationStatus.SENT)

    @staticmethod
    def skipped(channel: NotificationChannel, reason: str) -> NotificationOutcome:
        return NotificationOutcome(channel, NotificationStatus.SKIPPED, reason)

    @staticmethod
    def failed(channel: NotificationChannel, reason: str) -> NotificationOutcome:
        return NotificationOutcome(channel, NotificationStatus.FAILED, reason)

    @property
    def ok(self) -> bool:
        return self.status != NotificationStatus.FAILED


@dataclass(frozen=True)
class SignInResult:
    """Result of sign-in-or-sign-up."""
    account: PublicAccount
    created: bool
    notifications: list[NotificationOutcome] = field(default_factory=list)
