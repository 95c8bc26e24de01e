"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Built once per process by get_settings()."""
    email_from_address: str
    email_from_name: str = 'Support'
    signup_list_name: str = 'signups'

    aws_region: str = 'us-east-1'
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None

    mailchimp_api_key: str | None = None
    mailchimp_region: str | None = None
    mailchimp_signups_list_id: str | None = None

    stripe_secret_key: str | None = None

    google_client_id: str | None = None

    log_level: str = 'INFO'

    @property
    def email_from(self) -> str:
        """Sender header, e.g. 'Support <support@example.com>'."""
        return f"{self.email_from_name} <{self.email_from_address}>"

    @property
    def mailchimp_list_ids(self) -> dict[str, str]:
        """Map of mailing list name → Mailchimp audience ID."""
        if not self.mailchimp_signups_list_id:
            return {}
        return {self.signup_list_name: self.mailchimp_signups_list_id}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        email_from_address=os.getenv('EMAIL_SUPPORT_FROM_ADDRESS', ''),
        email_from_name=os.getenv('EMAIL_FROM_NAME', 'Support'),
        signup_list_name=os.getenv('MAILCHIMP_SIGNUPS_LIST_NAME', 'signups'),
        aws_region=os.getenv('AWS_REGION', 'us-east-1'),
        aws_access_key_id=os.getenv('AWS_ACCESS_KEY_ID') or None,
        aws_secret_access_key=os.getenv('AWS_SECRET_ACCESS_KEY') or None,
        mailchimp_api_key=os.getenv('MAILCHIMP_API_KEY') or None,
        mailchimp_region=os.getenv('MAILCHIMP_REGION') or None,
        mailchimp_signups_list_id=os.getenv('MAILCHIMP_SIGNUPS_LIST_ID') or None,
        stripe_secret_key=os.getenv('STRIPE_SECRET_KEY') or None,
        google_client_id=os.getenv('GOOGLE_CLIENT_ID') or None,
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    )
