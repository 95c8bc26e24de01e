"""In-memory implementation of InvitationRepository for testing."""


class FakeInvitationRepository:
    def __init__(self, pending_emails: list[str] | None = None, error: Exception | None = None):
        self.pending_emails: list[str] = list(pending_emails or [])
        self.error = error

    def count_pending(self, email: str) -> int:
        if self.error:
            raise self.error
        return self.pending_emails.count(email)
