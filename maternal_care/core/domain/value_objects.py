"""
Base Value Object Class for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are immutable (frozen=True), compared by value and carry
    no identity. Subclasses put their invariants in `_validate`.

    Example:
        ```python
        @dataclass(frozen=True)
        class AgeInWeeks(ValueObject):
            weeks: int
            days: int

            def _validate(self) -> None:
                if not 0 <= self.days <= 6:
                    raise ValueError("days must be within 0..6")
        ```
    """

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass
