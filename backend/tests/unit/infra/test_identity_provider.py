"""Unit tests for ``SQLAlchemyIdentityProvider``."""

from __future__ import annotations

import pytest

from dalgona.infra.identity import SQLAlchemyIdentityProvider
from dalgona.models.account import Account
from dalgona.services._shared.ports.identity_provider import DUPLICATE_ACCOUNT_MESSAGE
from dalgona.services._shared.result import ErrorKind, Failure, Success
from tests.factories.account import AccountFactory


@pytest.fixture()
def provider():
    return SQLAlchemyIdentityProvider()


class TestSQLAlchemyIdentityProvider:
    def test_creates_account(self, provider, session):
        result = provider.create_account("Fresh@Example.com", "Abc12345!")

        assert isinstance(result, Success)
        assert result.value.email == "fresh@example.com"
        stored = session.get(Account, result.value.id)
        assert stored is not None
        assert stored.verify_password("Abc12345!")

    def test_duplicate_email(self, provider, session):
        AccountFactory(email="taken@example.com")

        result = provider.create_account("taken@example.com", "Abc12345!")

        assert result == Failure(ErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_MESSAGE)

    def test_rejects_unusable_email(self, provider, session):
        result = provider.create_account("no-at-sign", "Abc12345!")

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.INVALID_INPUT
