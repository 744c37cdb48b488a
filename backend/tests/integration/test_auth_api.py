"""HTTP tests for login, logout and ``/me``."""

from __future__ import annotations

from http import HTTPStatus

from dalgona.core.extensions import limiter
from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from tests.helpers.auth import bearer, expired_token, issue_token
from tests.helpers.http import build_url


class TestLogin:
    def test_login_returns_bearer_token(self, client, profile):
        resp = client.post(
            build_url("/auth/login"), json={"email": profile.email, "password": DEFAULT_PASSWORD}
        )

        assert resp.status_code == HTTPStatus.OK
        data = resp.get_json()["data"]
        assert data["token_type"] == "Bearer"
        assert data["expires_in"] == 60 * 60

        me = client.get(build_url("/auth/me"), headers=bearer(data["access_token"]))
        assert me.status_code == HTTPStatus.OK
        assert me.get_json()["data"]["nickname"] == profile.nickname

    def test_wrong_password(self, client, profile):
        resp = client.post(
            build_url("/auth/login"), json={"email": profile.email, "password": "nope1234!"}
        )
        assert resp.status_code == HTTPStatus.UNAUTHORIZED
        assert resp.get_json()["code"] == "unauthorized"

    def test_missing_fields(self, client):
        resp = client.post(build_url("/auth/login"), json={"email": "a@b.co"})
        assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
        assert "password" in resp.get_json()["errors"]

    def test_login_is_rate_limited(self, app, client, monkeypatch):
        limiter.reset()
        monkeypatch.setitem(app.config, "AUTH_RATE_LIMIT", "2 per minute")
        body = {"email": "nobody@example.com", "password": "wrong1234!"}
        try:
            statuses = [client.post(build_url("/auth/login"), json=body).status_code for _ in range(3)]
        finally:
            limiter.reset()

        assert statuses == [HTTPStatus.UNAUTHORIZED, HTTPStatus.UNAUTHORIZED, HTTPStatus.TOO_MANY_REQUESTS]


class TestMe:
    def test_requires_token(self, client):
        assert client.get(build_url("/auth/me")).status_code == HTTPStatus.UNAUTHORIZED

    def test_expired_token(self, client, profile):
        resp = client.get(build_url("/auth/me"), headers=bearer(expired_token(profile.id)))
        assert resp.status_code == HTTPStatus.UNAUTHORIZED

    def test_account_without_profile_is_not_found(self, client, session):
        account = AccountFactory()
        resp = client.get(build_url("/auth/me"), headers=bearer(issue_token(account.id)))
        assert resp.status_code == HTTPStatus.NOT_FOUND


class TestLogout:
    def test_logout_revokes_token(self, client, auth_header):
        resp = client.post(build_url("/auth/logout"), headers=auth_header)
        assert resp.status_code == HTTPStatus.OK
        assert resp.get_json()["data"] == {"revoked": True}

        again = client.get(build_url("/auth/me"), headers=auth_header)
        assert again.status_code == HTTPStatus.UNAUTHORIZED
