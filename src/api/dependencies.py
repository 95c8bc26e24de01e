from fastapi import HTTPException

from adapter.aws.ses_email_sender import SESEmailSender
from adapter.external.google_identity import GoogleIdentityVerifier
from adapter.external.mailchimp import MailchimpMailingList
from adapter.external.stripe_gateway import StripePaymentGateway
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.account_repository import MongoAccountRepository
from adapter.mongodb.invitation_repository import MongoInvitationRepository
from adapter.mongodb.team_repository import MongoTeamRepository
from port.identity_verifier import IdentityVerifier
from services.account_service import AccountService
from utils.config import get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_account_service() -> AccountService:
    db = _get_db()
    settings = get_settings()
    return AccountService(
        accounts=MongoAccountRepository(db),
        teams=MongoTeamRepository(db),
        invitations=MongoInvitationRepository(db),
        payments=StripePaymentGateway(settings.stripe_secret_key),
        email_sender=SESEmailSender(
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
        ),
        mailing_list=MailchimpMailingList(
            api_key=settings.mailchimp_api_key,
            region=settings.mailchimp_region,
            list_ids=settings.mailchimp_list_ids,
        ),
        email_from=settings.email_from,
        signup_list_name=settings.signup_list_name,
    )


def get_identity_verifier() -> IdentityVerifier:
    return GoogleIdentityVerifier(get_settings().google_client_id)
