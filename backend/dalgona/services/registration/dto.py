"""
DTOs for the registration workflow.

The form copy lives in the client; the workflow only ever sees an immutable
:class:`RegistrationInput` and answers with a :class:`RegistrationOutcome`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationInput:
    """
    Raw sign-up form values.

    :param email: Login email as typed.
    :type email: str
    :param password: Raw password.
    :type password: str
    :param confirm_password: Password confirmation; empty means "not typed".
    :type confirm_password: str
    :param nickname: Public nickname.
    :type nickname: str
    :param name: Optional real name; never validated.
    :type name: str
    """

    email: str
    password: str
    confirm_password: str = ""
    nickname: str = ""
    name: str = ""


# --------------------------------------------------------------------------- #
# Validation
# --------------------------------------------------------------------------- #


class Field(str, Enum):
    """Keys of the field-error mapping, spelled the way the client names them."""

    EMAIL = "email"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirmPassword"
    NICKNAME = "nickname"
    GENERAL = "general"


FieldErrors = Mapping[Field, str]

_NO_ERRORS: FieldErrors = MappingProxyType({})


def freeze_errors(errors: Mapping[Field, str]) -> FieldErrors:
    """Return a read-only copy of ``errors``."""
    return MappingProxyType(dict(errors)) if errors else _NO_ERRORS


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Outcome of :func:`~dalgona.services.registration.validation.validate_registration`.

    :param errors: Read-only mapping ``field -> message``; empty when valid.
    """

    errors: FieldErrors = field(default_factory=lambda: _NO_ERRORS)

    @property
    def ok(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict[str, str]:
        """Plain ``{"email": "..."}`` view for serialization."""
        return {f.value: msg for f, msg in self.errors.items()}


# --------------------------------------------------------------------------- #
# Workflow output
# --------------------------------------------------------------------------- #


class RegistrationState(str, Enum):
    """States of one sign-up attempt."""

    EDITING = "editing"
    VALIDATING = "validating"
    EDITING_WITH_ERRORS = "editing_with_errors"
    SUBMITTING = "submitting"
    PERSISTING_PROFILE = "persisting_profile"
    COMPLETE = "complete"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why a sign-up attempt ended in :attr:`RegistrationState.FAILED`."""

    DUPLICATE_ACCOUNT = "duplicate_account"
    REJECTED = "rejected"
    PROFILE_INSERT = "profile_insert"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class RegistrationOutcome:
    """
    Result of :meth:`RegistrationWorkflow.submit`.

    :param state: Terminal state of this attempt.
    :type state: RegistrationState
    :param errors: Field errors to show next to the form (may hold ``general``).
    :type errors: FieldErrors
    :param show_dialog: ``True`` when the client must present a blocking notice
        (duplicate account).
    :type show_dialog: bool
    :param account_id: Account created by the identity provider, if any.
    :type account_id: int | None
    :param next_route: Route the navigator was sent to on completion.
    :type next_route: str | None
    :param reason: Set only for failed attempts.
    :type reason: FailureReason | None
    """

    state: RegistrationState
    errors: FieldErrors = field(default_factory=lambda: _NO_ERRORS)
    show_dialog: bool = False
    account_id: int | None = None
    next_route: str | None = None
    reason: FailureReason | None = None

    @property
    def ok(self) -> bool:
        return self.state is RegistrationState.COMPLETE

    def errors_dict(self) -> dict[str, str]:
        return {f.value: msg for f, msg in self.errors.items()}
