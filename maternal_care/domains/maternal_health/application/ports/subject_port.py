# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Subject repository port (DIP compliant).
# ============================================================================
"""Subject Repository Port."""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.subject import Subject
    from ...domain.value_objects.pregnancy_status import PregnancyStatus


@runtime_checkable
class ISubjectRepository(Protocol):
    """Source of the subject population followed by the reminder engine.

    Implementations: SqlAlchemySubjectRepository
    """

    async def list_by_status(self, statuses: Sequence["PregnancyStatus"]) -> list["Subject"]:
        """Subjects whose pregnancy form is in one of the statuses."""
        ...

    async def get(self, subject_id: int) -> "Subject | None":
        ...

    async def get_many(self, subject_ids: Iterable[int]) -> dict[int, "Subject"]:
        ...
