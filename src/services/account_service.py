"""Account service: lifecycle of end-user accounts.

Sign-in/sign-up, profile updates, payment profile attachment and rotation,
and team-membership lookups. Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.

Every mutation is a single field-scoped update on one account document.
The read-then-write sequences below are not atomic end to end; unique
indexes in the store are the final arbiter for identity, email and slug.
"""

import logging

from domain.model.account import (
    Account,
    IdentityToken,
    PaymentView,
    ProfileView,
    PublicAccount,
)
from domain.model.account_update import (
    PaymentAttachment,
    PaymentRotation,
    ProfileChange,
    TokenRefresh,
)
from domain.model.errors import NotFoundError, PreconditionError, ValidationError
from domain.model.notification import (
    NotificationChannel,
    NotificationOutcome,
    SignInResult,
)
from domain.model.team import Team
from port.account_repository import AccountRepository
from port.email_sender import EmailSender
from port.invitation_repository import InvitationRepository
from port.mailing_list import MailingList
from port.payment_gateway import PaymentGateway
from port.team_repository import TeamRepository
from services.slug_service import generate_slug, slugify_name
from utils.email_templates import build_welcome_email

logger = logging.getLogger(__name__)

DEFAULT_SIGNUP_LIST = 'signups'


class AccountService:
    """Orchestrates the account record and its external collaborators.

    Collaborators:
        accounts: canonical account store
        teams / invitations: read-only team and invitation stores
        payments: payment processor gateway
        email_sender / mailing_list: best-effort notification channels

    email_from is the full sender header used for transactional email.
    """

    def __init__(
        self,
        accounts: AccountRepository,
        teams: TeamRepository,
        invitations: InvitationRepository,
        payments: PaymentGateway,
        email_sender: EmailSender,
        mailing_list: MailingList,
        email_from: str,
        signup_list_name: str = DEFAULT_SIGNUP_LIST,
    ):
        self.accounts = accounts
        self.teams = teams
        self.invitations = invitations
        self.payments = payments
        self.email_sender = email_sender
        self.mailing_list = mailing_list
        self.email_from = email_from
        self.signup_list_name = signup_list_name

    # ── sign-in / sign-up ────────────────────────────────────

    def sign_in_or_sign_up(
        self,
        external_identity_id: str,
        email: str,
        identity_token: IdentityToken | None,
        display_name: str,
        avatar_url: str,
    ) -> SignInResult:
        """Return the account for external_identity_id, creating it on first sign-in.

        For an existing account, non-empty token fields are merged into the
        stored token and the projection read *before* the merge is returned.

        Raises:
            DuplicateError: a concurrent sign-up won the race for this identity
        """
        existing = self.accounts.get_public_by_external_identity(external_identity_id)

        if existing:
            if identity_token is None or identity_token.is_empty:
                return SignInResult(account=existing, created=False)

            refresh = TokenRefresh(
                access_token=identity_token.access_token,
                refresh_token=identity_token.refresh_token,
            )
            self.accounts.apply_update(existing.id, refresh)
            logger.debug("Identity token refreshed", extra={"userId": existing.id})
            return SignInResult(account=existing, created=False)

        slug = generate_slug(self.accounts, display_name)
        account = self.accounts.create(Account.create(
            external_identity_id=external_identity_id,
            email=email,
            slug=slug,
            display_name=display_name,
            avatar_url=avatar_url,
            identity_token=identity_token,
        ))
        logger.info("Account created", extra={"userId": account.id, "slug": slug})

        notifications = [
            self._send_welcome_email(email, display_name),
            self._subscribe_to_signups(email),
        ]

        return SignInResult(
            account=PublicAccount.from_account(account),
            created=True,
            notifications=notifications,
        )

    def _send_welcome_email(self, email: str, display_name: str) -> NotificationOutcome:
        channel = NotificationChannel.WELCOME_EMAIL
        try:
            has_invitation = self.invitations.count_pending(email) > 0
        except Exception as e:
            logger.error("Invitation lookup error", extra={"email": email, "error": str(e)})
            return NotificationOutcome.failed(channel, f"invitation lookup failed: {e}")

        if has_invitation:
            return NotificationOutcome.skipped(channel, "pending invitation")

        template = build_welcome_email(display_name)
        try:
            self.email_sender.send(
                from_address=self.email_from,
                to=[email],
                subject=template.subject,
                body=template.body,
            )
        except Exception as e:
            logger.error("Email sending error", extra={"email": email, "error": str(e)})
            return NotificationOutcome.failed(channel, str(e))

        return NotificationOutcome.sent(channel)

    def _subscribe_to_signups(self, email: str) -> NotificationOutcome:
        channel = NotificationChannel.MAILING_LIST
        try:
            self.mailing_list.subscribe(email=email, list_name=self.signup_list_name)
        except Exception as e:
            logger.error("Mailing list error", extra={
                "email": email, "listName": self.signup_list_name, "error": str(e),
            })
            return NotificationOutcome.failed(channel, str(e))
        return NotificationOutcome.sent(channel)

    # ── profile ──────────────────────────────────────────────

    def update_profile(self, user_id: str, name: str, avatar_url: str) -> ProfileView:
        """Update display name and avatar. The slug is regenerated only when the name changes.

        A new name that slugifies to the current slug (e.g. a case change)
        keeps it. The previous avatar file is not removed from storage.
        """
        account = self._get_account(user_id)

        slug = account.slug
        if name != account.display_name and slugify_name(name) != account.slug:
            slug = generate_slug(self.accounts, name)

        updated = self.accounts.apply_update(
            user_id,
            ProfileChange(display_name=name, avatar_url=avatar_url, slug=slug),
        )
        if not updated:
            raise NotFoundError("Account not found")

        return ProfileView(
            display_name=updated.display_name,
            avatar_url=updated.avatar_url,
            slug=updated.slug,
        )

    # ── payments ─────────────────────────────────────────────

    def attach_payment_profile(
        self,
        user_id: str,
        payment_token: str,
        idempotency_key: str | None = None,
    ) -> PaymentView:
        """Create a processor customer for the account and mirror it locally.

        Gateway errors propagate unchanged and nothing is written. A retried
        call without an idempotency key can create a second remote customer.
        """
        account = self._get_account(user_id)

        profile = self.payments.create_customer(
            token=payment_token,
            email=account.email,
            account_id=account.id,
            idempotency_key=idempotency_key,
        )
        logger.debug("Payment customer created", extra={
            "userId": user_id, "customerId": profile.id, "defaultSource": profile.default_source,
        })

        method = self.payments.retrieve_payment_method(
            customer_id=profile.id,
            method_id=profile.default_source,
        )

        updated = self.accounts.apply_update(
            user_id,
            PaymentAttachment(payment_profile=profile, payment_method=method),
        )
        if not updated:
            raise NotFoundError("Account not found")

        logger.info("Payment profile attached", extra={"userId": user_id, "customerId": profile.id})
        return PaymentView.from_account(updated)

    def rotate_payment_method(self, user_id: str, payment_token: str) -> PaymentView:
        """Add a new payment method and make it the customer's default.

        Raises:
            PreconditionError: no payment profile has been attached yet
        """
        account = self._get_account(user_id)
        if account.payment_profile is None:
            raise PreconditionError("Payment profile not attached")

        customer_id = account.payment_profile.id

        method = self.payments.create_payment_method(customer_id=customer_id, token=payment_token)
        logger.debug("Payment method created", extra={"userId": user_id, "methodId": method.id})

        profile = self.payments.update_default_payment_method(
            customer_id=customer_id,
            method_id=method.id,
        )

        updated = self.accounts.apply_update(
            user_id,
            PaymentRotation(payment_profile=profile, payment_method=method),
        )
        if not updated:
            raise NotFoundError("Account not found")

        logger.info("Payment method rotated", extra={"userId": user_id, "methodId": method.id})
        return PaymentView.from_account(updated)

    # ── teams ────────────────────────────────────────────────

    def check_permission_and_get_team(self, user_id: str, team_id: str) -> Team:
        """Return the team if user_id is one of its members.

        A missing team and a team the caller does not belong to produce the
        same error so that team existence is not revealed to non-members.

        Raises:
            ValidationError: user_id or team_id is empty
            NotFoundError: team missing or caller is not a member
        """
        if not user_id or not team_id:
            raise ValidationError("Bad data")

        team = self.teams.get_by_id(team_id)
        if not team or not team.has_member(user_id):
            raise NotFoundError("Team not found")

        return team

    def get_team_members(self, user_id: str, team_id: str) -> list[PublicAccount]:
        team = self.check_permission_and_get_team(user_id, team_id)
        return self.accounts.find_public_by_ids(team.member_ids)

    # ── reads ────────────────────────────────────────────────

    def get_public_account(self, user_id: str) -> PublicAccount:
        return PublicAccount.from_account(self._get_account(user_id))

    def _get_account(self, user_id: str) -> Account:
        if not user_id:
            raise ValidationError("Bad data")
        account = self.accounts.get_by_id(user_id)
        if not account:
            raise NotFoundError("Account not found")
        return account
