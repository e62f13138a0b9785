"""Environment driven settings for the API, the database, the notifiers and the scheduler."""

from maternal_care.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
