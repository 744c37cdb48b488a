"""
RegistrationWorkflow
====================

Process-level workflow that signs a new user up:

- Validates the form locally; nothing leaves the process on invalid input.
- Creates the login identity through the :class:`IdentityProvider` port.
- Inserts the profile row into the ``users`` collection of the
  :class:`RecordStore` port, keyed by the new account id.
- Sends the client to the next screen through the :class:`Navigator` port.

Every collaborator is called at most once per :meth:`RegistrationWorkflow.submit`.
There are no retries and the identity account is not removed when the
profile insert fails.
"""

from __future__ import annotations

import logging

from dalgona.services._shared.ports.identity_provider import (
    DUPLICATE_ACCOUNT_MESSAGE,
    IdentityProvider,
)
from dalgona.services._shared.ports.navigator import Navigator
from dalgona.services._shared.ports.record_store import RecordStore
from dalgona.services._shared.result import ErrorKind, Failure
from dalgona.services.registration.dto import (
    FailureReason,
    Field,
    RegistrationInput,
    RegistrationOutcome,
    RegistrationState,
    freeze_errors,
)
from dalgona.services.registration.validation import validate_registration

log = logging.getLogger(__name__)

PROFILE_COLLECTION = "users"
DEFAULT_NEXT_ROUTE = "/sign-up/profile"

DUPLICATE_ACCOUNT_NOTICE = "이미 가입 된 이메일 입니다."
PROFILE_INSERT_FAILED_MESSAGE = "회원 데이터 추가 중 오류가 발생했습니다."
UNEXPECTED_FAILURE_MESSAGE = "회원가입 중 오류가 발생했습니다."


def is_duplicate_account(failure: Failure) -> bool:
    """Return ``True`` for the identity provider's "already registered" failure."""
    return (
        failure.kind is ErrorKind.DUPLICATE_ACCOUNT
        or failure.message == DUPLICATE_ACCOUNT_MESSAGE
    )


class RegistrationWorkflow:
    """
    Orchestrates one sign-up attempt over the identity, store and navigation ports.

    :param identity: Identity provider creating login accounts.
    :type identity: IdentityProvider
    :param store: Record store receiving the profile row.
    :type store: RecordStore
    :param navigator: Navigation collaborator notified on completion.
    :type navigator: Navigator
    :param next_route: Route to go to once the profile exists.
    :type next_route: str
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: RecordStore,
        navigator: Navigator,
        *,
        next_route: str = DEFAULT_NEXT_ROUTE,
    ) -> None:
        self.identity = identity
        self.store = store
        self.navigator = navigator
        self.next_route = next_route
        self.state = RegistrationState.EDITING

    def _enter(self, state: RegistrationState) -> None:
        log.debug("registration state %s -> %s", self.state.value, state.value, extra={"state": state.value})
        self.state = state

    def _fail(
        self,
        reason: FailureReason,
        message: str,
        *,
        show_dialog: bool = False,
        account_id: int | None = None,
    ) -> RegistrationOutcome:
        self._enter(RegistrationState.FAILED)
        return RegistrationOutcome(
            state=RegistrationState.FAILED,
            errors=freeze_errors({Field.GENERAL: message}),
            show_dialog=show_dialog,
            account_id=account_id,
            reason=reason,
        )

    def submit(self, data: RegistrationInput) -> RegistrationOutcome:
        """
        Run one sign-up attempt.

        :param data: Form values.
        :type data: RegistrationInput
        :returns: Outcome carrying the final state and any field errors.
        :rtype: RegistrationOutcome
        """
        self._enter(RegistrationState.VALIDATING)
        validation = validate_registration(data)
        if not validation.ok:
            self._enter(RegistrationState.EDITING_WITH_ERRORS)
            return RegistrationOutcome(
                state=RegistrationState.EDITING_WITH_ERRORS,
                errors=validation.errors,
            )

        account_id: int | None = None
        try:
            self._enter(RegistrationState.SUBMITTING)
            created = self.identity.create_account(data.email, data.password)
            if isinstance(created, Failure):
                duplicate = is_duplicate_account(created)
                log.warning(
                    "Account creation rejected: kind=%s message=%s",
                    created.kind.value,
                    created.message,
                )
                if duplicate:
                    return self._fail(
                        FailureReason.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_NOTICE, show_dialog=True
                    )
                return self._fail(FailureReason.REJECTED, created.message)

            account = created.value
            if account is None:
                # Provider answered without an error and without an account.
                log.warning("Account creation returned no payload; nothing to persist")
                self._enter(RegistrationState.EDITING)
                return RegistrationOutcome(state=RegistrationState.EDITING)

            account_id = account.id
            self._enter(RegistrationState.PERSISTING_PROFILE)
            inserted = self.store.insert(
                PROFILE_COLLECTION,
                {
                    "id": account.id,
                    "email": data.email,
                    "nickname": data.nickname,
                    "name": data.name,
                },
            )
            if isinstance(inserted, Failure):
                log.error(
                    "Profile insert failed for account %s: %s",
                    account.id,
                    inserted.message,
                    extra={"account_id": account.id, "collection": PROFILE_COLLECTION},
                )
                return self._fail(
                    FailureReason.PROFILE_INSERT, PROFILE_INSERT_FAILED_MESSAGE, account_id=account.id
                )

            self.navigator.go_to(self.next_route)
        except Exception:
            log.exception("Unexpected error during sign-up", extra={"account_id": account_id})
            return self._fail(FailureReason.UNEXPECTED, UNEXPECTED_FAILURE_MESSAGE, account_id=account_id)

        self._enter(RegistrationState.COMPLETE)
        log.info("Sign-up complete", extra={"account_id": account_id})
        return RegistrationOutcome(
            state=RegistrationState.COMPLETE,
            account_id=account_id,
            next_route=self.next_route,
        )
