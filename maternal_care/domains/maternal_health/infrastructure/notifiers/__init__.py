"""
Notification channels.
"""

from .factory import build_channel_chain
from .twilio_sms_notifier import TwilioSmsNotifier, truncate_sms
from .whatsapp_notifier import WhatsAppNotifier

__all__ = [
    "TwilioSmsNotifier",
    "WhatsAppNotifier",
    "build_channel_chain",
    "truncate_sms",
]
