"""
Twilio SMS Notifier

INotifier adapter over the Twilio REST client. The client is synchronous,
so sends run in a worker thread. The HTTP timeout bounds that thread so an
abandoned send does not complete after the caller has given up on it.
"""

import asyncio
import logging

from twilio.base.exceptions import TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


def truncate_sms(body: str, max_length: int) -> str:
    """Cut a message down to a single SMS."""
    if len(body) <= max_length:
        return body
    return body[: max(max_length - len(ELLIPSIS), 0)].rstrip() + ELLIPSIS


class TwilioSmsNotifier:
    """Send reminders as plain SMS through Twilio."""

    channel = "sms"

    def __init__(self, client: Client, from_number: str, max_length: int = 150):
        """
        Initialize notifier.

        Args:
            client: Configured Twilio REST client
            from_number: Sender number in E.164 format
            max_length: Longest body sent, longer messages are truncated
        """
        self._client = client
        self._from_number = from_number
        self._max_length = max_length

    @classmethod
    def from_credentials(
        cls,
        account_sid: str,
        auth_token: str,
        from_number: str,
        max_length: int = 150,
        timeout: float | None = None,
    ) -> "TwilioSmsNotifier":
        """Build a notifier whose HTTP requests give up after ``timeout`` seconds."""
        client = Client(account_sid, auth_token, http_client=TwilioHttpClient(timeout=timeout))
        return cls(client, from_number, max_length)

    async def send(self, address: str, body: str) -> bool:
        if not address or not body:
            return False

        text = truncate_sms(body, self._max_length)
        try:
            message = await asyncio.to_thread(
                self._client.messages.create,
                body=text,
                from_=self._from_number,
                to=address,
            )
        except TwilioRestException as e:
            logger.warning(f"Twilio rejected SMS to {address}: {e.status} {e.msg}")
            return False
        except Exception as e:
            logger.error(f"Twilio send to {address} failed: {e}")
            return False

        logger.info(f"SMS sent to {address}: {message.sid}")
        return True
