# domain/model/account.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


# ── Value Objects ────────────────────────────────────────


@dataclass
class IdentityToken:
    """OAuth tokens issued by the identity provider. Either side may be refreshed alone."""
    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.access_token and not self.refresh_token


@dataclass(frozen=True)
class PaymentProfile:
    """Mirror of the processor's customer object."""
    id: str
    created_at: datetime | None = None
    currency: str | None = None
    default_source: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PaymentMethod:
    """Mirror of the processor's default payment method (card)."""
    id: str
    brand: str | None = None
    funding: str | None = None
    country: str | None = None
    last4: str | None = None
    exp_month: int | None = None
    exp_year: int | None = None


# ── Account Domain Model ─────────────────────────────────


@dataclass
class Account:
    """Domain model representing an end-user account."""
    id: str
    external_identity_id: str
    email: str
    slug: str
    created_at: datetime

    display_name: str = ''
    avatar_url: str = ''
    identity_token: IdentityToken = field(default_factory=IdentityToken)
    is_admin: bool = False
    is_github_connected: bool = False
    default_team_slug: str = ''

    payment_profile: PaymentProfile | None = None
    payment_method: PaymentMethod | None = None
    has_payment_method: bool = False

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(
        external_identity_id: str,
        email: str,
        slug: str,
        display_name: str,
        avatar_url: str,
        identity_token: IdentityToken | None = None,
    ) -> 'Account':
        """Create a brand-new account with a generated ID and no payment data."""
        return Account(
            id=uuid.uuid4().hex,
            external_identity_id=external_identity_id,
            email=email,
            slug=slug,
            created_at=datetime.now(timezone.utc),
            display_name=display_name,
            avatar_url=avatar_url,
            identity_token=identity_token or IdentityToken(),
            default_team_slug='',
        )


# ── Projections ──────────────────────────────────────────

# Fields safe for external exposure. Tokens and payment data never leave through these.
PUBLIC_FIELDS = (
    'id',
    'display_name',
    'email',
    'avatar_url',
    'slug',
    'is_github_connected',
    'default_team_slug',
)


@dataclass(frozen=True)
class PublicAccount:
    """Public projection of an Account."""
    id: str
    display_name: str
    email: str
    avatar_url: str
    slug: str
    is_github_connected: bool = False
    default_team_slug: str = ''

    @staticmethod
    def from_account(account: Account) -> 'PublicAccount':
        return PublicAccount(**{name: getattr(account, name) for name in PUBLIC_FIELDS})


@dataclass(frozen=True)
class ProfileView:
    """Result of a profile update."""
    display_name: str
    avatar_url: str
    slug: str


@dataclass(frozen=True)
class PaymentView:
    """Payment fields of an account after attachment or rotation."""
    payment_profile: PaymentProfile | None
    payment_method: PaymentMethod | None
    has_payment_method: bool

    @staticmethod
    def from_account(account: Account) -> 'PaymentView':
        return PaymentView(
            payment_profile=account.payment_profile,
            payment_method=account.payment_method,
            has_payment_method=account.has_payment_method,
        )
