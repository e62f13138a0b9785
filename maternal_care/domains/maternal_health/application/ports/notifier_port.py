# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Outbound notifier port (DIP compliant).
# ============================================================================
"""Notifier Port.

A transport able to deliver a text message to an address. Implementations
report failure by returning False; the channel chain also treats raised
exceptions and timeouts as failures.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class INotifier(Protocol):
    """Interface for message transports.

    Implementations: WhatsAppNotifier, TwilioSmsNotifier, FallbackNotifier
    """

    channel: str

    async def send(self, address: str, body: str) -> bool:
        """Send a text message.

        Args:
            address: Recipient phone number.
            body: Message text.

        Returns:
            True when the transport accepted the message.
        """
        ...
