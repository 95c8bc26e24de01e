"""Account routes (sign-in, profile, payment profile)."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status

from api.dependencies import get_account_service, get_identity_verifier
from api.errors import HANDLED_ERRORS, to_http_exception
from api.models import (
    AccountResponse,
    PaymentResponse,
    PaymentTokenRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    SignInRequest,
    SignInResponse,
)
from api.security import create_access_token, get_current_account, get_current_account_id
from domain.model.account import IdentityToken, PublicAccount
from port.identity_verifier import IdentityVerificationError, IdentityVerifier
from services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    request: SignInRequest,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    service: AccountService = Depends(get_account_service),
):
    """Sign in with a provider ID token, creating the account on first use.

    The token is verified server-side before anything is read or written;
    an unverifiable token gets 401. Returns a session token and the public account.
    """
    try:
        identity = verifier.verify(request.id_token)
    except IdentityVerificationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e

    try:
        result = service.sign_in_or_sign_up(
            external_identity_id=identity.external_identity_id,
            email=identity.email,
            identity_token=IdentityToken(
                access_token=request.access_token,
                refresh_token=request.refresh_token,
            ),
            display_name=identity.display_name,
            avatar_url=identity.avatar_url,
        )
    except HANDLED_ERRORS as e:
        raise to_http_exception(e) from e

    logger.info("Account signed in", extra={"userId": result.account.id, "accountCreated": result.created})

    return SignInResponse(
        token=create_access_token(result.account.id),
        created=result.created,
        user=AccountResponse.from_domain(result.account),
    )


@router.get("/me", response_model=AccountResponse)
def get_me(current: PublicAccount = Depends(get_current_account)):
    return AccountResponse.from_domain(current)


@router.patch("/me/profile", response_model=ProfileResponse)
def update_profile(
    request: ProfileUpdateRequest,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """Update display name and avatar. The slug follows the display name."""
    try:
        view = service.update_profile(account_id, name=request.name, avatar_url=request.avatar_url)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e) from e
    return ProfileResponse.from_domain(view)


@router.post("/me/payment-profile", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def attach_payment_profile(
    request: PaymentTokenRequest,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
):
    """Create the processor customer for this account from a card token.

    Not idempotent unless the client sends an Idempotency-Key header.
    """
    try:
        view = service.attach_payment_profile(account_id, request.token, idempotency_key=idempotency_key)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e) from e
    return PaymentResponse.from_domain(view)


@router.put("/me/payment-method", response_model=PaymentResponse)
def rotate_payment_method(
    request: PaymentTokenRequest,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
):
    """Replace the default card of an already attached payment profile."""
    try:
        view = service.rotate_payment_method(account_id, request.token)
    except HANDLED_ERRORS as e:
        raise to_http_exception(e) from e
    return PaymentResponse.from_domain(view)
