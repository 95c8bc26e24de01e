"""Google adapter: implements IdentityVerifier by checking Google-signed ID tokens.

API Documentation: https://google-auth.readthedocs.io/en/stable/reference/google.oauth2.id_token.html
"""

import logging
from threading import RLock

import google.auth.exceptions
import google.auth.transport.requests
import google.oauth2.id_token
import requests

from port.identity_verifier import IdentityVerificationError, VerifiedIdentity

logger = logging.getLogger(__name__)

logging.getLogger("google").setLevel(logging.WARNING)

# Google's signing certs are fetched through one shared session
_session: requests.Session | None = None
_lock = RLock()


def _transport() -> google.auth.transport.requests.Request:
    global _session
    with _lock:
        if _session is None:
            _session = requests.Session()
        return google.auth.transport.requests.Request(session=_session)


class GoogleIdentityVerifier:
    """Verifies ID tokens issued to client_id (the OAuth client of this app)."""

    def __init__(self, client_id: str | None):
        self.client_id = client_id

    def verify(self, credential: str) -> VerifiedIdentity:
        if not self.client_id:
            raise IdentityVerificationError("Google sign-in is not configured")

        try:
            claims = google.oauth2.id_token.verify_oauth2_token(
                credential, _transport(), self.client_id,
            )
        except (ValueError, google.auth.exceptions.GoogleAuthError) as e:
            logger.warning("ID token rejected", extra={"error": str(e)[:200]})
            raise IdentityVerificationError("Invalid identity token") from e

        if not claims or not claims.get('sub') or not claims.get('email'):
            raise IdentityVerificationError("Identity token is missing subject or email")
        if not claims.get('email_verified', False):
            raise IdentityVerificationError("Email address is not verified by the provider")

        return VerifiedIdentity(
            external_identity_id=claims['sub'],
            email=claims['email'],
            display_name=claims.get('name', ''),
            avatar_url=claims.get('picture', ''),
        )
