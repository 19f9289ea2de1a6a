"""Outcomes returned by the inventory rules.

Every service operation answers with exactly one of these variants instead of
raising. ``Ok`` carries the value; the others describe why the request was
refused, with enough context for the API layer to build a message.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailed:
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return "Validation failed"


@dataclass(frozen=True)
class DuplicateCode:
    code: str

    @property
    def message(self) -> str:
        return f"Product with code {self.code} already exists"


@dataclass(frozen=True)
class NotFound:
    product_id: Any

    @property
    def message(self) -> str:
        return f"Product not found with id: {self.product_id}"


@dataclass(frozen=True)
class InsufficientStock:
    available: int
    requested: int

    @property
    def message(self) -> str:
        return f"Insufficient stock. Available: {self.available}, Requested: {self.requested}"


Failure = Union[ValidationFailed, DuplicateCode, NotFound, InsufficientStock]
Result = Union[Ok[T], Failure]

__all__ = [
    "Ok",
    "ValidationFailed",
    "DuplicateCode",
    "NotFound",
    "InsufficientStock",
    "Failure",
    "Result",
]
