"""
WhatsApp Cloud API client.

Only the text message endpoint is used: reminders are plain text and carry
no media or interactive parts.
"""

import logging
import re
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def normalize_recipient(phone_number: str) -> str:
    """Strip a ``whatsapp:`` prefix and any formatting, keeping the digits."""
    return _NON_DIGITS.sub("", phone_number.replace("whatsapp:", ""))


def _failure(error: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": error, **extra}


def _graph_error_message(response: httpx.Response) -> str:
    """The Graph API nests the reason under ``error.message``; fall back to the raw body."""
    try:
        return response.json().get("error", {}).get("message") or response.text
    except ValueError:
        return response.text


class WhatsAppHttpClient:
    """
    Sends text messages from one business phone number.

    Calls never raise on transport or API errors; they return
    ``{"success": True, "data": ...}`` or ``{"success": False, "error": ...}``.
    """

    def __init__(
        self,
        base_url: str,
        version: str,
        phone_number_id: str,
        access_token: str,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._version = version
        self._phone_number_id = phone_number_id
        self._access_token = access_token
        self._timeout = timeout

    @property
    def message_url(self) -> str:
        return f"{self._base_url}/{self._version}/{self._phone_number_id}/messages"

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._access_token}", "Content-Type": "application/json"}

    async def send_text(self, to: str, body: str) -> dict[str, Any]:
        """
        Send ``body`` to ``to`` as a text message.

        Args:
            to: Recipient phone number in any common formatting
            body: Message text, link previews disabled

        Returns:
            Result dictionary, see the class docstring
        """
        recipient = normalize_recipient(to or "")
        if not recipient or not body:
            return _failure("Recipient and message body are required")

        return await self._post_message(
            {
                "messaging_product": "whatsapp",
                "recipient_type": "individual",
                "to": recipient,
                "type": "text",
                "text": {"preview_url": False, "body": body},
            }
        )

    async def _post_message(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.message_url, json=payload, headers=self.headers)
        except httpx.TimeoutException:
            logger.warning(f"WhatsApp send timed out after {self._timeout}s")
            return _failure("WhatsApp API timed out")
        except httpx.ConnectError as e:
            logger.warning(f"WhatsApp API unreachable: {e}")
            return _failure("WhatsApp API unreachable")
        except httpx.HTTPError as e:
            logger.error(f"WhatsApp transport error: {e}")
            return _failure(f"Transport error: {e}")

        if response.status_code == 200:
            logger.debug("WhatsApp message accepted")
            return {"success": True, "data": response.json()}

        reason = _graph_error_message(response)
        logger.error(f"WhatsApp API rejected message ({response.status_code}): {reason}")
        return _failure(f"HTTP {response.status_code}: {reason}", status_code=response.status_code)
