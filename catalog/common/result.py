"""
Result pattern for the service layer.

Services return a ``Result`` (with a payload) or an ``OperationResult``
(mutation-only) instead of raising for expected failures such as not-found,
validation errors or business-rule violations. Only unexpected infrastructure
errors are caught and converted, and they carry ``ErrorKind.UNEXPECTED``.

Examples:
    >>> result = Result.success(product_dto)
    >>> result.ok
    True

    >>> result = Result.failures(["Price must be greater than zero"], ErrorKind.VALIDATION)
    >>> result.messages
    ['Price must be greater than zero']
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories; the transport layer maps each to a status code."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of an operation that produces no value.

    Attributes:
        ok: True if the operation succeeded
        error: Single error message (failure only)
        errors: Ordered error messages (failure only)
        kind: Failure category (failure only)
    """

    ok: bool
    error: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    kind: Optional[ErrorKind] = None

    def __post_init__(self):
        if self.ok and (self.error is not None or self.errors or self.kind is not None):
            raise ValueError("A successful result cannot carry error information")
        if not self.ok and not (self.error or self.errors):
            raise ValueError("A failed result needs at least one error message")

    @property
    def messages(self) -> List[str]:
        if self.ok:
            return []
        if self.errors:
            return list(self.errors)
        return [self.error]

    @classmethod
    def success(cls) -> "OperationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str, kind: ErrorKind = ErrorKind.UNEXPECTED) -> "OperationResult":
        return cls(ok=False, error=error, kind=kind)

    @classmethod
    def failures(cls, errors: Iterable[str], kind: ErrorKind = ErrorKind.VALIDATION) -> "OperationResult":
        return cls(ok=False, errors=list(errors), kind=kind)

    def to_dict(self) -> dict:
        if self.ok:
            return {"success": True}
        return {"success": False, "error": {"kind": self.kind.value, "messages": self.messages}}


@dataclass(frozen=True)
class Result(OperationResult, Generic[T]):
    """
    Outcome of an operation that produces a value of type ``T`` on success.

    A successful result always carries its value; a failed one never does.
    """

    value: Optional[T] = None

    def __post_init__(self):
        super().__post_init__()
        if not self.ok and self.value is not None:
            raise ValueError("A failed result cannot carry a value")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    def to_dict(self) -> dict:
        if self.ok:
            return {"success": True, "data": self.value}
        return super().to_dict()
