"""Field-scoped update requests for Account.

Each mutating operation has its own request type listing exactly the fields it
may touch. Storage adapters only accept these types, so no operation can
overwrite a field it does not own. ``changes()`` returns dotted field paths
(``identity_token.access_token``) mapped to their new values.
"""

from dataclasses import dataclass
from typing import Any

from domain.model.account import PaymentMethod, PaymentProfile


@dataclass(frozen=True)
class TokenRefresh:
    """Refresh identity tokens. Empty subfields are left untouched."""
    access_token: str | None = None
    refresh_token: str | None = None

    def changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if self.access_token:
            changes['identity_token.access_token'] = self.access_token
        if self.refresh_token:
            changes['identity_token.refresh_token'] = self.refresh_token
        return changes


@dataclass(frozen=True)
class ProfileChange:
    display_name: str
    avatar_url: str
    slug: str

    def changes(self) -> dict[str, Any]:
        return {
            'display_name': self.display_name,
            'avatar_url': self.avatar_url,
            'slug': self.slug,
        }


@dataclass(frozen=True)
class PaymentAttachment:
    """First attachment of a payment profile; marks the account as having a payment method."""
    payment_profile: PaymentProfile
    payment_method: PaymentMethod

    def changes(self) -> dict[str, Any]:
        return {
            'payment_profile': self.payment_profile,
            'payment_method': self.payment_method,
            'has_payment_method': True,
        }


@dataclass(frozen=True)
class PaymentRotation:
    """Replace the default payment method. ``has_payment_method`` is not touched."""
    payment_profile: PaymentProfile
    payment_method: PaymentMethod

    def changes(self) -> dict[str, Any]:
        return {
            'payment_profile': self.payment_profile,
            'payment_method': self.payment_method,
        }


AccountUpdate = TokenRefresh | ProfileChange | PaymentAttachment | PaymentRotation
