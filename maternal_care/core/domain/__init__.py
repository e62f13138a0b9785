"""Shared building blocks for the maternal health domain: entities, value objects and errors."""

from maternal_care.core.domain.entities import AggregateRoot, Entity
from maternal_care.core.domain.exceptions import (
    ConcurrencyException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)
from maternal_care.core.domain.value_objects import ValueObject

__all__ = [
    "AggregateRoot",
    "ConcurrencyException",
    "DomainException",
    "Entity",
    "EntityNotFoundException",
    "InvalidOperationException",
    "ValidationException",
    "ValueObject",
]
