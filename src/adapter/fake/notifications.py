"""In-memory implementations of EmailSender and MailingList for testing."""

from port.email_sender import EmailDeliveryError
from port.mailing_list import MailingListError


class FakeEmailSender:
    """Records sent messages. Set fail=True to make every send raise."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[dict] = []

    def send(self, from_address: str, to: list[str], subject: str, body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("SES unavailable")
        self.sent.append({
            'from_address': from_address,
            'to': list(to),
            'subject': subject,
            'body': body,
        })


class FakeMailingList:
    """Records subscriptions. Set fail=True to make every subscribe raise."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, str]] = []
        self.subscribed: list[tuple[str, str]] = []

    def subscribe(self, email: str, list_name: str) -> None:
        self.calls.append((email, list_name))
        if self.fail:
            raise MailingListError("Mailchimp unavailable")
        self.subscribed.append((email, list_name))
