"""Language Value Object."""

from enum import Enum


class Language(str, Enum):
    """Languages reminder templates are written in."""

    EN = "en"
    FR = "fr"
    RW = "rw"  # Kinyarwanda

    @classmethod
    def parse(cls, value: "str | Language | None", default: "Language | None" = None) -> "Language":
        """Resolve a stored language code, falling back to English.

        Args:
            value: Language code as stored on the subject (e.g. "fr", "RW").
            default: Language used when the code is missing or unknown.

        Returns:
            The matching language.
        """
        fallback = default or cls.EN
        if value is None:
            return fallback
        if isinstance(value, Language):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            return fallback
