"""Base class for the diary and auth application services."""

from __future__ import annotations

from dalgona.core import errors as api_errors
from dalgona.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ServiceError,
)
from dalgona.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

# Most specific first; ServiceError catches the remaining subclasses.
_API_ERRORS: tuple[tuple[type[ServiceError], type[api_errors.APIError]], ...] = (
    (NotFoundError, api_errors.NotFound),
    (AuthorizationError, api_errors.Forbidden),
    (AuthenticationError, api_errors.Unauthorized),
    (ServiceError, api_errors.APIError),
)


class BaseService:
    """
    Unit-of-Work factories, error translation and the ownership rule.

    Services reach the database only through :meth:`rw_uow` and
    :meth:`ro_uow`; the API layer wraps calls in ``service_errors`` so
    :meth:`translate_exceptions` decides the HTTP status.
    """

    read_isolation = "READ COMMITTED"

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork(isolation_level=self.read_isolation)

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Return the API error for a service error, or ``exc`` itself when it
        is not one.

        :param exc: Exception raised inside the service.
        :rtype: Exception
        """
        for service_error, api_error in _API_ERRORS:
            if isinstance(exc, service_error):
                return api_error(str(exc))
        return exc

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        :raises AuthorizationError: Unless ``actor_id`` wrote the record.
        """
        if actor_id is None or int(actor_id) != int(owner_id):
            raise AuthorizationError(msg or "You can only access your own diary.")
