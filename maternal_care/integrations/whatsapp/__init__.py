"""
WhatsApp Cloud API integration.
"""

from .http_client import WhatsAppHttpClient

__all__ = ["WhatsAppHttpClient"]
