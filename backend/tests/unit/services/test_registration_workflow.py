"""Unit tests for ``RegistrationWorkflow`` against in-memory collaborators."""

from __future__ import annotations

import pytest

from dalgona.services._shared.ports.navigator import RecordingNavigator
from dalgona.services._shared.result import ErrorKind, Failure
from dalgona.services.registration.dto import (
    FailureReason,
    Field,
    RegistrationInput,
    RegistrationState,
)
from dalgona.services.registration.service import (
    DEFAULT_NEXT_ROUTE,
    DUPLICATE_ACCOUNT_NOTICE,
    PROFILE_COLLECTION,
    PROFILE_INSERT_FAILED_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
    RegistrationWorkflow,
    is_duplicate_account,
)
from tests.helpers.fakes import FakeIdentityProvider, FakeRecordStore, unavailable

VALID = RegistrationInput(
    email="new.member@example.com",
    password="Abc12345!",
    confirm_password="Abc12345!",
    nickname="새싹",
    name="김새싹",
)


@pytest.fixture()
def identity():
    return FakeIdentityProvider()


@pytest.fixture()
def store():
    return FakeRecordStore()


@pytest.fixture()
def navigator():
    return RecordingNavigator()


@pytest.fixture()
def workflow(identity, store, navigator):
    return RegistrationWorkflow(identity, store, navigator)


class TestRegistrationWorkflow:
    def test_happy_path(self, workflow, identity, store, navigator):
        """Account, then profile row keyed by the account id, then navigation."""
        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.COMPLETE
        assert outcome.ok
        assert outcome.errors_dict() == {}
        assert identity.calls == [(VALID.email, VALID.password)]
        account = identity.accounts[VALID.email]
        assert outcome.account_id == account.id
        assert store.inserts == [
            (
                PROFILE_COLLECTION,
                {"id": account.id, "email": VALID.email, "nickname": "새싹", "name": "김새싹"},
            )
        ]
        assert navigator.routes == [DEFAULT_NEXT_ROUTE]
        assert outcome.next_route == DEFAULT_NEXT_ROUTE
        assert workflow.state is RegistrationState.COMPLETE

    def test_custom_next_route(self, identity, store, navigator):
        wf = RegistrationWorkflow(identity, store, navigator, next_route="/welcome")
        assert wf.submit(VALID).next_route == "/welcome"
        assert navigator.last_route == "/welcome"

    def test_invalid_form_never_reaches_collaborators(self, workflow, identity, store, navigator):
        outcome = workflow.submit(
            RegistrationInput(email="nope", password="Abc12345!", nickname="ab")
        )

        assert outcome.state is RegistrationState.EDITING_WITH_ERRORS
        assert set(outcome.errors) == {Field.EMAIL}
        assert identity.calls == []
        assert store.inserts == []
        assert navigator.routes == []

    def test_duplicate_account_shows_dialog(self, workflow, identity, store, navigator):
        identity.failure = Failure(ErrorKind.DUPLICATE_ACCOUNT, "User already registered")

        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.FAILED
        assert outcome.show_dialog is True
        assert outcome.reason is FailureReason.DUPLICATE_ACCOUNT
        assert outcome.errors == {Field.GENERAL: DUPLICATE_ACCOUNT_NOTICE}
        assert outcome.account_id is None
        assert store.inserts == []
        assert navigator.routes == []

    def test_second_sign_up_with_same_email_is_duplicate(self, workflow, identity):
        assert workflow.submit(VALID).ok
        again = workflow.submit(VALID)
        assert again.show_dialog
        assert len(identity.calls) == 2

    def test_other_identity_failure_passes_message_through(self, workflow, identity, store):
        identity.failure = Failure(ErrorKind.INVALID_INPUT, "Password should be stronger")

        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.FAILED
        assert outcome.show_dialog is False
        assert outcome.errors_dict() == {"general": "Password should be stronger"}
        assert outcome.reason is FailureReason.REJECTED
        assert store.inserts == []

    def test_profile_insert_failure_keeps_account(self, workflow, identity, store, navigator):
        store.insert_failure = unavailable()

        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.FAILED
        assert outcome.errors == {Field.GENERAL: PROFILE_INSERT_FAILED_MESSAGE}
        assert outcome.reason is FailureReason.PROFILE_INSERT
        assert outcome.account_id == identity.accounts[VALID.email].id
        # One attempt only, and the account is not rolled back.
        assert len(store.inserts) == 1
        assert VALID.email in identity.accounts
        assert navigator.routes == []

    def test_empty_success_returns_to_editing(self, workflow, identity, store, navigator):
        identity.empty_success = True

        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.EDITING
        assert outcome.errors_dict() == {}
        assert store.inserts == []
        assert navigator.routes == []

    def test_unexpected_exception_becomes_generic_failure(self, workflow, identity, store):
        identity.error = ConnectionError("socket closed")

        outcome = workflow.submit(VALID)

        assert outcome.state is RegistrationState.FAILED
        assert outcome.errors == {Field.GENERAL: UNEXPECTED_FAILURE_MESSAGE}
        assert outcome.show_dialog is False
        assert outcome.reason is FailureReason.UNEXPECTED
        assert store.inserts == []

    def test_exception_from_navigator_keeps_account_id(self, identity, store):
        class BrokenNavigator:
            def go_to(self, route):
                raise RuntimeError("router gone")

        wf = RegistrationWorkflow(identity, store, BrokenNavigator())
        outcome = wf.submit(VALID)

        assert outcome.state is RegistrationState.FAILED
        assert outcome.errors == {Field.GENERAL: UNEXPECTED_FAILURE_MESSAGE}
        assert outcome.account_id == identity.accounts[VALID.email].id


class TestIsDuplicateAccount:
    def test_by_kind(self):
        assert is_duplicate_account(Failure(ErrorKind.DUPLICATE_ACCOUNT, "whatever"))

    def test_by_message(self):
        assert is_duplicate_account(Failure(ErrorKind.UNKNOWN, "User already registered"))

    def test_other_failures(self):
        assert not is_duplicate_account(unavailable())
