"""Transactional email templates."""

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class EmailContent:
    subject: str
    body: str


def build_welcome_email(user_name: str) -> EmailContent:
    """Welcome email sent after sign-up to users who were not invited to a team."""
    name = escape(user_name or 'there')
    return EmailContent(
        subject='Welcome to SaaS by Async',
        body=f"""<p>Welcome {name}!</p>
<p>Thanks for signing up. To get started, create your first team and invite your teammates.</p>
<p>If you have any questions, just reply to this email.</p>
<p>The Async team</p>""",
    )
