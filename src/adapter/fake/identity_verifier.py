"""In-memory implementation of IdentityVerifier for testing."""

from port.identity_verifier import IdentityVerificationError, VerifiedIdentity


class FakeIdentityVerifier:
    """Accepts only the credentials it was given."""

    def __init__(self, identities: dict[str, VerifiedIdentity] | None = None):
        self.identities = dict(identities or {})
        self.calls: list[str] = []

    def add(self, credential: str, identity: VerifiedIdentity) -> None:
        self.identities[credential] = identity

    def verify(self, credential: str) -> VerifiedIdentity:
        self.calls.append(credential)
        try:
            return self.identities[credential]
        except KeyError:
            raise IdentityVerificationError("Invalid identity token") from None
