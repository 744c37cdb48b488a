"""
Service-layer exceptions, free of Flask and HTTP.

``BaseService.translate_exceptions`` turns them into
:mod:`dalgona.core.errors` responses at the API boundary.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Root of the service errors; unmapped subclasses answer 400."""


class NotFoundError(ServiceError):
    """
    :param entity: Model name such as ``"DiaryEntry"``.
    :param key: Identifier that was looked up.
    """

    def __init__(self, entity: str, key: str | int) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class AuthorizationError(ServiceError):
    """The caller does not own the record it addresses."""


class AuthenticationError(ServiceError):
    """Credentials or a token subject were rejected."""
