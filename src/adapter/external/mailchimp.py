"""Mailchimp adapter.

Implements MailingList by adding members to a Mailchimp audience.

API Documentation: https://mailchimp.com/developer/marketing/api/list-members/
"""

import logging

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from port.mailing_list import MailingListError

logger = logging.getLogger(__name__)

API_TIMEOUT_SECONDS = 10.0


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
    reraise=True,
)
def _post_with_retry(client: httpx.Client, url: str, payload: dict) -> httpx.Response:
    return client.post(url, json=payload)


class MailchimpMailingList:
    """Adapter that subscribes emails to Mailchimp audiences.

    list_ids maps list names used by the application (e.g. 'signups')
    to Mailchimp audience IDs.
    """

    def __init__(
        self,
        api_key: str | None,
        region: str | None,
        list_ids: dict[str, str],
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = f"https://{region}.api.mailchimp.com/3.0"
        self.list_ids = dict(list_ids)
        self.enabled = bool(api_key and region)
        self._auth = ("apikey", api_key or "")
        self._transport = transport

    def subscribe(self, email: str, list_name: str) -> None:
        if not self.enabled:
            raise MailingListError("Mailchimp is not configured")

        list_id = self.list_ids.get(list_name)
        if not list_id:
            raise MailingListError(f"Unknown mailing list: {list_name}")

        url = f"{self.base_url}/lists/{list_id}/members"
        payload = {"email_address": email, "status": "subscribed"}

        try:
            with httpx.Client(
                auth=self._auth, timeout=API_TIMEOUT_SECONDS, transport=self._transport,
            ) as client:
                response = _post_with_retry(client, url, payload)
        except httpx.HTTPError as e:
            raise MailingListError(f"Mailchimp request failed: {e}") from e

        if response.status_code == 400 and _is_existing_member(response):
            logger.debug("Already subscribed", extra={"listName": list_name})
            return

        if response.status_code >= 400:
            raise MailingListError(
                f"Mailchimp returned {response.status_code}: {response.text[:200]}"
            )

        logger.info("Subscribed to mailing list", extra={"listName": list_name})


def _is_existing_member(response: httpx.Response) -> bool:
    try:
        return response.json().get("title") == "Member Exists"
    except ValueError:
        return False
