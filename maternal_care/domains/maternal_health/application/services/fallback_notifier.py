# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Ordered channel chain exposed as a single notifier.
# ============================================================================
"""Fallback Notifier.

Tries each configured transport in order (e.g. WhatsApp, then SMS) until one
accepts the message. A delivery attempt only fails when every channel failed.
"""

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..dto.reminder_dtos import ChannelAttempt, DeliveryReport

if TYPE_CHECKING:
    from ..ports import INotifier

logger = logging.getLogger(__name__)


class FallbackNotifier:
    """Composite notifier with per-channel timeout.

    A channel that returns False, raises, or exceeds the timeout counts as a
    failed channel and the next one is tried.
    """

    channel = "fallback"

    def __init__(self, notifiers: Sequence["INotifier"], timeout_seconds: float = 20.0):
        """Initialize the chain.

        Args:
            notifiers: Transports in the order they are tried.
            timeout_seconds: Upper bound for a single channel send.
        """
        self._notifiers = tuple(notifiers)
        self._timeout = timeout_seconds

    @property
    def channels(self) -> list[str]:
        return [notifier.channel for notifier in self._notifiers]

    async def deliver(self, address: str, body: str) -> DeliveryReport:
        """Attempt delivery and report every channel tried."""
        attempts: list[ChannelAttempt] = []

        for notifier in self._notifiers:
            attempt = await self._attempt(notifier, address, body)
            attempts.append(attempt)
            if attempt.success:
                break
            logger.warning(f"Channel {attempt.channel} failed for {address}: {attempt.error}")

        report = DeliveryReport(tuple(attempts))
        if not report.delivered:
            logger.warning(f"All channels failed for {address}: {report.error_summary}")
        return report

    async def send(self, address: str, body: str) -> bool:
        report = await self.deliver(address, body)
        return report.delivered

    async def _attempt(self, notifier: "INotifier", address: str, body: str) -> ChannelAttempt:
        started = time.perf_counter()
        error: str | None = None
        try:
            success = bool(await asyncio.wait_for(notifier.send(address, body), timeout=self._timeout))
            if not success:
                error = "delivery failed"
        except TimeoutError:
            success = False
            error = f"timed out after {self._timeout}s"
        except Exception as e:
            logger.error(f"Channel {notifier.channel} raised while sending: {e}", exc_info=True)
            success = False
            error = str(e) or e.__class__.__name__

        duration_ms = (time.perf_counter() - started) * 1000
        return ChannelAttempt(channel=notifier.channel, success=success, error=error, duration_ms=duration_ms)
