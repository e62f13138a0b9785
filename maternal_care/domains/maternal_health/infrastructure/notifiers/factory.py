"""
Channel chain factory.

Builds the ordered notifier chain from settings. Channels whose credentials
are missing are left out with a warning.
"""

import logging

from maternal_care.config.settings import Settings
from maternal_care.integrations.whatsapp import WhatsAppHttpClient

from ...application.ports import INotifier
from ...application.services.fallback_notifier import FallbackNotifier
from .twilio_sms_notifier import TwilioSmsNotifier
from .whatsapp_notifier import WhatsAppNotifier

logger = logging.getLogger(__name__)


def _build_whatsapp(settings: Settings) -> INotifier | None:
    if not (settings.WHATSAPP_PHONE_NUMBER_ID and settings.WHATSAPP_ACCESS_TOKEN):
        logger.warning("WhatsApp channel disabled: WHATSAPP_PHONE_NUMBER_ID or WHATSAPP_ACCESS_TOKEN missing")
        return None
    client = WhatsAppHttpClient(
        base_url=settings.WHATSAPP_API_BASE,
        version=settings.WHATSAPP_API_VERSION,
        phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
        access_token=settings.WHATSAPP_ACCESS_TOKEN,
        timeout=settings.SEND_TIMEOUT_SECONDS,
    )
    return WhatsAppNotifier(client)


def _build_sms(settings: Settings) -> INotifier | None:
    if not (settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_PHONE_NUMBER):
        logger.warning("SMS channel disabled: Twilio credentials missing")
        return None
    return TwilioSmsNotifier.from_credentials(
        settings.TWILIO_ACCOUNT_SID,
        settings.TWILIO_AUTH_TOKEN,
        settings.TWILIO_PHONE_NUMBER,
        max_length=settings.SMS_MAX_LENGTH,
        timeout=settings.SEND_TIMEOUT_SECONDS,
    )


_BUILDERS = {
    "whatsapp": _build_whatsapp,
    "sms": _build_sms,
}


def build_channel_chain(settings: Settings) -> FallbackNotifier:
    """Notifier chain in the order given by NOTIFICATION_CHANNELS."""
    notifiers = []
    for name in settings.notification_channels:
        notifier = _BUILDERS[name](settings)
        if notifier is not None:
            notifiers.append(notifier)

    if not notifiers:
        logger.error("No notification channel is configured, every delivery will fail")
    else:
        logger.info(f"Notification channels: {[n.channel for n in notifiers]}")
    return FallbackNotifier(notifiers, timeout_seconds=settings.SEND_TIMEOUT_SECONDS)
