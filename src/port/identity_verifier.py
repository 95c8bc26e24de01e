"""Identity verifier port: turns a provider credential into a trusted identity."""

from dataclasses import dataclass
from typing import Protocol


class IdentityVerificationError(Exception):
    """The credential is invalid, expired, for another audience, or verification is unavailable."""


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims the identity provider vouched for."""
    external_identity_id: str
    email: str
    display_name: str = ''
    avatar_url: str = ''


class IdentityVerifier(Protocol):
    def verify(self, credential: str) -> VerifiedIdentity:
        """Verify credential server-side. Raise IdentityVerificationError if it is not trusted."""
        ...
