"""Sign-up form field checks. Pure functions, no I/O."""

from __future__ import annotations

import re

from dalgona.services.registration.dto import (
    Field,
    RegistrationInput,
    ValidationResult,
    freeze_errors,
)

# Browser whitespace set; Python's \s differs on \x1c-\x1f, \x85 and \ufeff.
_WHITESPACE = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_EMAIL_PART = f"[^{_WHITESPACE}@]+"
EMAIL_PATTERN = re.compile(f"{_EMAIL_PART}@{_EMAIL_PART}\\.{_EMAIL_PART}")
# Letter, digit and one of ``@$!%*?&``; only those characters; 8 or more.
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[A-Za-z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}$"
)
NICKNAME_MIN_LENGTH = 2

EMAIL_MESSAGE = "이메일 형식이 잘못되었습니다."
PASSWORD_MESSAGE = "비밀번호는 8자 이상, 영문과 숫자, 특수문자를 포함해야 합니다."
CONFIRM_PASSWORD_MESSAGE = "비밀번호와 비밀번호 확인이 일치하지 않습니다."
NICKNAME_MESSAGE = "별명은 2글자 이상이어야 합니다."


def utf16_length(value: str) -> int:
    """Length of ``value`` in UTF-16 code units (astral characters count twice)."""
    return len(value.encode("utf-16-le")) // 2


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_password(value: str) -> bool:
    return PASSWORD_PATTERN.fullmatch(value) is not None


def validate_registration(data: RegistrationInput) -> ValidationResult:
    """
    Check every sign-up field independently.

    ``confirm_password`` is only compared when it is non-empty, so an empty
    confirmation passes. ``name`` is never checked.

    :param data: Raw form values.
    :type data: RegistrationInput
    :returns: Result whose ``errors`` holds one message per failing field.
    :rtype: ValidationResult
    """
    errors: dict[Field, str] = {}

    if not is_valid_email(data.email):
        errors[Field.EMAIL] = EMAIL_MESSAGE

    if not is_valid_password(data.password):
        errors[Field.PASSWORD] = PASSWORD_MESSAGE

    if data.confirm_password and data.confirm_password != data.password:
        errors[Field.CONFIRM_PASSWORD] = CONFIRM_PASSWORD_MESSAGE

    if utf16_length(data.nickname) < NICKNAME_MIN_LENGTH:
        errors[Field.NICKNAME] = NICKNAME_MESSAGE

    return ValidationResult(errors=freeze_errors(errors))
