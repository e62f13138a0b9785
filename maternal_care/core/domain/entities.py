"""
Identity-bearing domain objects.

``Entity`` gives subjects and reminders id based equality and audit
timestamps. ``AggregateRoot`` adds the optimistic-locking version checked by
the reminder stores and a buffer of events raised by state changes.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

TId = TypeVar("TId")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """Domain object identified by ``id`` once persisted."""

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __eq__(self, other: object) -> bool:
        # Two unsaved objects are never the same entity
        if not isinstance(other, Entity) or self.id is None:
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id)) if self.id is not None else id(self)

    def is_new(self) -> bool:
        return self.id is None

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or _utcnow()


@dataclass
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Consistency boundary persisted as a unit.

    Stores compare ``version`` with the stored row on every update and bump
    it on success; events are dropped once the change is saved.
    """

    _domain_events: list[Any] = field(default_factory=list, repr=False, compare=False)
    version: int = field(default=0)

    def _record_event(self, event: Any) -> None:
        self._domain_events.append(event)

    def get_domain_events(self) -> list[Any]:
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def increment_version(self) -> None:
        self.version += 1
