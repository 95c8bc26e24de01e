from typing import Protocol


class InvitationRepository(Protocol):
    """Protocol defining read access to pending team invitations."""
    def count_pending(self, email: str) -> int:
        """Return the number of pending invitations addressed to email."""
        ...
