"""Unit tests for AccountRepository and UserProfileRepository."""

import pytest

from dalgona.repositories.account import AccountRepository
from dalgona.repositories.profile import UserProfileRepository
from tests.factories.account import AccountFactory


class TestAccountRepository:
    """Ensure ``AccountRepository`` looks up and verifies credentials."""

    @pytest.fixture()
    def repo(self):
        return AccountRepository()

    def test_get_by_email_is_case_insensitive(self, repo, session):
        a = AccountFactory(email="alice@example.com")
        session.commit()

        fetched = repo.get_by_email("  ALICE@example.com")
        assert fetched is not None
        assert fetched.id == a.id

    def test_exists_by_email(self, repo, session):
        AccountFactory(email="bob@example.com")
        session.commit()

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_authenticate_valid_and_invalid(self, repo, session):
        AccountFactory(email="auth@example.com", password="strongPass1!")
        session.commit()

        assert repo.authenticate("auth@example.com", "strongPass1!") is not None
        assert repo.authenticate("auth@example.com", "wrongpass") is None
        assert repo.authenticate("nope@example.com", "strongPass1!") is None


class TestUserProfileRepository:
    @pytest.fixture()
    def repo(self):
        return UserProfileRepository()

    def test_update_nickname(self, repo, profile):
        repo.update(profile, nickname="새별명")
        assert repo.find_one(nickname="새별명").id == profile.id

    def test_email_is_not_updatable(self, repo, profile):
        with pytest.raises(ValueError):
            repo.update(profile, email="other@example.com")
