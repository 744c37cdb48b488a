"""Sign-up and authentication endpoints."""

from __future__ import annotations

from datetime import timedelta
from http import HTTPStatus
from typing import NoReturn

from flask import Blueprint, current_app, request

from dalgona.api.deps import (
    bearer_token,
    current_account_id,
    get_identity_provider,
    get_record_store,
    json_response,
    require_auth,
    service_errors,
    timing,
)
from dalgona.core.errors import APIError
from dalgona.core.extensions import get_denylist_store, limiter
from dalgona.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from dalgona.schemas import (
    LoginSchema,
    ProfileSchema,
    SignUpResultSchema,
    SignUpSchema,
    TokenResponseSchema,
)
from dalgona.services._shared.ports.navigator import RecordingNavigator
from dalgona.services.auth.dto import AuthTokenConfig, LoginIn, LogoutIn
from dalgona.services.auth.service import AuthService
from dalgona.services.registration.dto import (
    FailureReason,
    Field,
    RegistrationOutcome,
    RegistrationState,
)
from dalgona.services.registration.service import RegistrationWorkflow

bp = Blueprint("auth", __name__)

sign_up_schema = SignUpSchema()
sign_up_result_schema = SignUpResultSchema()
login_schema = LoginSchema()
token_schema = TokenResponseSchema()
profile_schema = ProfileSchema()

SIGN_UP_COMPLETE_TITLE = "회원가입이 완료되었어요!"
SIGN_UP_COMPLETE_MESSAGE = "달고나로 소중한 추억을 남겨볼까요?"
SIGN_UP_COMPLETE_ACTION = "일기 쓰러 가기"


def _auth_rate_limit() -> str:
    return str(current_app.config.get("AUTH_RATE_LIMIT", "5 per minute"))


def _auth_service() -> AuthService:
    minutes = int(current_app.config.get("JWT_ACCESS_TOKEN_MINUTES", 60))
    return AuthService(
        token_provider=JWTTokenProvider(),
        denylist_store=get_denylist_store(),
        token_cfg=AuthTokenConfig(access_expires=timedelta(minutes=minutes)),
    )


def _raise_for_outcome(outcome: RegistrationOutcome) -> NoReturn:
    """Turn an unsuccessful sign-up outcome into the matching problem response."""

    errors = outcome.errors_dict()
    if outcome.state is RegistrationState.EDITING_WITH_ERRORS:
        raise APIError(
            "Validation failed",
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            details={"errors": errors},
        )

    general = outcome.errors.get(Field.GENERAL, "")
    if outcome.reason is FailureReason.DUPLICATE_ACCOUNT:
        raise APIError(
            general,
            status_code=HTTPStatus.CONFLICT,
            code="duplicate_account",
            details={"errors": errors, "show_dialog": True},
        )
    if outcome.reason is FailureReason.REJECTED:
        raise APIError(
            general,
            status_code=HTTPStatus.BAD_REQUEST,
            code="sign_up_rejected",
            details={"errors": errors},
        )
    code = "profile_creation_failed" if outcome.reason is FailureReason.PROFILE_INSERT else "sign_up_failed"
    raise APIError(
        general,
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        code=code,
        details={"errors": errors, "account_id": outcome.account_id},
    )


@bp.post("/sign-up")
@limiter.limit(_auth_rate_limit)
@timing
def sign_up():
    """Run the registration workflow for the submitted form."""

    data = sign_up_schema.load(request.get_json(silent=True) or {})
    navigator = RecordingNavigator()
    workflow = RegistrationWorkflow(
        get_identity_provider(),
        get_record_store(),
        navigator,
        next_route=current_app.config.get("SIGNUP_NEXT_ROUTE", "/sign-up/profile"),
    )
    outcome = workflow.submit(data)

    if outcome.state is RegistrationState.COMPLETE:
        body = sign_up_result_schema.dump(outcome)
        body["next"] = navigator.last_route
        return json_response({"data": body}, status=HTTPStatus.CREATED)
    if outcome.state is RegistrationState.EDITING:
        return json_response({"data": sign_up_result_schema.dump(outcome)})

    _raise_for_outcome(outcome)


@bp.get("/sign-up/complete")
@timing
def sign_up_complete():
    """Content of the sign-up completion screen."""

    return json_response(
        {
            "data": {
                "title": SIGN_UP_COMPLETE_TITLE,
                "message": SIGN_UP_COMPLETE_MESSAGE,
                "action_label": SIGN_UP_COMPLETE_ACTION,
                "next": current_app.config.get("SIGNUP_COMPLETE_ROUTE", "/main"),
            }
        }
    )


@bp.post("/login")
@limiter.limit(_auth_rate_limit)
@timing
def login():
    """Authenticate credentials and issue an access token."""

    data = login_schema.load(request.get_json(silent=True) or {})
    service = _auth_service()
    with service_errors(service):
        token = service.login(LoginIn(email=data["email"], password=data["password"]))
    return json_response({"data": token_schema.dump(token)})


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the access token used for this request."""

    service = _auth_service()
    with service_errors(service):
        service.logout(LogoutIn(token=bearer_token()))
    return json_response({"data": {"revoked": True}})


@bp.get("/me")
@require_auth
@timing
def whoami():
    """Return the authenticated account's profile."""

    service = _auth_service()
    with service_errors(service):
        profile = service.whoami(current_account_id())
    return json_response({"data": profile_schema.dump(profile)})
