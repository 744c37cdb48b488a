"""
Tagged results returned by external collaborators (identity provider, record store).

Ports report expected failures as values instead of raising, so that the
workflows can switch on the tag::

    result = identity.create_account(email, password)
    if isinstance(result, Failure):
        ...
    payload = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories a collaborator can report."""

    DUPLICATE_ACCOUNT = "duplicate_account"
    INVALID_INPUT = "invalid_input"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNKNOWN_COLLECTION = "unknown_collection"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """
    Successful call.

    :param value: Returned payload; may be ``None`` when the collaborator
        answered without one.
    """

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """
    Failed call.

    :param kind: Failure category.
    :type kind: ErrorKind
    :param message: Human-readable message as produced by the collaborator.
    :type message: str
    """

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]

__all__ = ["ErrorKind", "Failure", "Result", "Success"]
