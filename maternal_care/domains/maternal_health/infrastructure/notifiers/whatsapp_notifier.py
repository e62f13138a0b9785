"""
WhatsApp Notifier

INotifier adapter over the WhatsApp Cloud API client.
"""

import logging

from maternal_care.integrations.whatsapp import WhatsAppHttpClient

logger = logging.getLogger(__name__)


class WhatsAppNotifier:
    """Send reminders as WhatsApp text messages."""

    channel = "whatsapp"

    def __init__(self, client: WhatsAppHttpClient):
        self._client = client

    async def send(self, address: str, body: str) -> bool:
        result = await self._client.send_text(address, body)
        if not result.get("success"):
            logger.warning(f"WhatsApp delivery to {address} failed: {result.get('error')}")
            return False

        message_ids = [m.get("id") for m in result.get("data", {}).get("messages", [])]
        logger.info(f"WhatsApp message sent to {address}: {message_ids}")
        return True
