"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from domain.model.account import PaymentView, ProfileView, PublicAccount


class SignInRequest(BaseModel):
    """Provider credentials from the OAuth callback.

    Identity, email, name and avatar are taken from the verified id_token only.
    access_token / refresh_token are stored for later provider API calls.
    """
    id_token: str = Field(..., min_length=1)
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    avatar_url: str = ''


class PaymentTokenRequest(BaseModel):
    """Token produced by the processor's client-side tooling (e.g. Stripe.js)."""
    token: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    """Public account fields."""
    id: str
    display_name: str
    email: str
    avatar_url: str
    slug: str
    is_github_connected: bool = False
    default_team_slug: str = ''

    @classmethod
    def from_domain(cls, account: PublicAccount) -> 'AccountResponse':
        return cls(
            id=account.id,
            display_name=account.display_name,
            email=account.email,
            avatar_url=account.avatar_url,
            slug=account.slug,
            is_github_connected=account.is_github_connected,
            default_team_slug=account.default_team_slug,
        )


class SignInResponse(BaseModel):
    token: str
    created: bool
    user: AccountResponse


class ProfileResponse(BaseModel):
    display_name: str
    avatar_url: str
    slug: str

    @classmethod
    def from_domain(cls, view: ProfileView) -> 'ProfileResponse':
        return cls(display_name=view.display_name, avatar_url=view.avatar_url, slug=view.slug)


class PaymentProfileResponse(BaseModel):
    id: str
    created_at: Optional[datetime] = None
    currency: Optional[str] = None
    default_source: Optional[str] = None
    description: Optional[str] = None


class PaymentMethodResponse(BaseModel):
    id: str
    brand: Optional[str] = None
    funding: Optional[str] = None
    country: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None


class PaymentResponse(BaseModel):
    payment_profile: Optional[PaymentProfileResponse] = None
    payment_method: Optional[PaymentMethodResponse] = None
    has_payment_method: bool

    @classmethod
    def from_domain(cls, view: PaymentView) -> 'PaymentResponse':
        profile = view.payment_profile
        method = view.payment_method
        return cls(
            payment_profile=PaymentProfileResponse(
                id=profile.id,
                created_at=profile.created_at,
                currency=profile.currency,
                default_source=profile.default_source,
                description=profile.description,
            ) if profile else None,
            payment_method=PaymentMethodResponse(
                id=method.id,
                brand=method.brand,
                funding=method.funding,
                country=method.country,
                last4=method.last4,
                exp_month=method.exp_month,
                exp_year=method.exp_year,
            ) if method else None,
            has_payment_method=view.has_payment_method,
        )
