# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Notification audit log port (DIP compliant).
# ============================================================================
"""Notification Log Port."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..dto.reminder_dtos import NotificationLogEntry


@runtime_checkable
class INotificationLog(Protocol):
    """Audit trail of notification attempts.

    Implementations: SqlAlchemyNotificationLog
    """

    async def record(self, entry: "NotificationLogEntry") -> None:
        ...

    async def list_for_subject(self, subject_id: int, limit: int = 50) -> list["NotificationLogEntry"]:
        ...
