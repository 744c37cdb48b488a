"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from dalgona.models.account import EMAIL_MAX_LENGTH
from dalgona.services.registration.dto import RegistrationInput


class SignUpSchema(Schema):
    """
    Input payload for the sign-up form.

    Only types and the stored email width are checked here. Field rules
    (email shape, password strength, nickname length) belong to the
    registration workflow so that their messages reach the client keyed by
    field.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default="", validate=validate.Length(max=EMAIL_MAX_LENGTH))
    password = fields.String(load_default="")
    confirm_password = fields.String(data_key="confirmPassword", load_default="")
    nickname = fields.String(load_default="")
    name = fields.String(load_default="")

    @post_load
    def to_input(self, data: dict[str, Any], **_: Any) -> RegistrationInput:
        return RegistrationInput(**data)


class SignUpResultSchema(Schema):
    """Response payload for a sign-up attempt that did not fail."""

    account_id = fields.Integer(allow_none=True)
    state = fields.Function(lambda outcome: outcome.state.value)
    next = fields.String(attribute="next_route", allow_none=True)


class LoginSchema(Schema):
    """Input payload for authenticating an account."""

    email = fields.String(required=True, validate=validate.Length(min=3, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    access_token = fields.String(required=True)
    token_type = fields.String(load_default="Bearer")
    expires_in = fields.Integer()


class ProfileSchema(Schema):
    """Response payload exposing the profile of the authenticated account."""

    id = fields.Integer(required=True)
    email = fields.String(required=True)
    nickname = fields.String(required=True)
    name = fields.String(allow_none=True)
