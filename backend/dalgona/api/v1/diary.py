"""Diary entry endpoints (owner-scoped)."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, request

from dalgona.api.deps import (
    current_account_id,
    json_response,
    require_auth,
    service_errors,
    timing,
)
from dalgona.api.etag import set_response_etag, verify_etag
from dalgona.core.errors import PreconditionFailed
from dalgona.schemas import (
    DiaryEntryCreateSchema,
    DiaryEntrySchema,
    DiaryEntryUpdateSchema,
    MonthQuerySchema,
    PeriodSchema,
)
from dalgona.services.diary.service import DiaryService

bp = Blueprint("diary", __name__)

entry_schema = DiaryEntrySchema()
entry_list_schema = DiaryEntrySchema(many=True)
entry_create_schema = DiaryEntryCreateSchema()
entry_update_schema = DiaryEntryUpdateSchema()
month_query_schema = MonthQuerySchema()
period_schema = PeriodSchema()


@bp.get("")
@require_auth
@timing
def list_entries():
    """Return the caller's entries of one month, newest day first."""

    period = month_query_schema.load(request.args)
    service = DiaryService()
    with service_errors(service):
        items = service.list_entries(current_account_id(), period)
    return json_response(
        {"data": entry_list_schema.dump(items), "meta": {"period": period_schema.dump(period), "total": len(items)}}
    )


@bp.post("")
@require_auth
@timing
def create_entry():
    """Create a diary entry for the caller."""

    dto = entry_create_schema.load(request.get_json(silent=True) or {})
    service = DiaryService()
    with service_errors(service):
        entry = service.create_entry(current_account_id(), dto)
    response = json_response({"data": entry_schema.dump(entry)}, status=HTTPStatus.CREATED)
    return set_response_etag(response, entry)


@bp.get("/<int:entry_id>")
@require_auth
@timing
def get_entry(entry_id: int):
    """Return one entry owned by the caller."""

    service = DiaryService()
    with service_errors(service):
        entry = service.get_entry(current_account_id(), entry_id)
    return set_response_etag(json_response({"data": entry_schema.dump(entry)}), entry)


@bp.patch("/<int:entry_id>")
@require_auth
@timing
def update_entry(entry_id: int):
    """Partially update an entry; honours ``If-Match`` when sent."""

    dto = entry_update_schema.load(request.get_json(silent=True) or {})
    account_id = current_account_id()
    service = DiaryService()
    if_match = request.headers.get("If-Match")
    with service_errors(service):
        if if_match:
            current = service.get_entry(account_id, entry_id)
            if not verify_etag(current, if_match):
                raise PreconditionFailed("ETag mismatch.")
        entry = service.update_entry(account_id, entry_id, dto)
    return set_response_etag(json_response({"data": entry_schema.dump(entry)}), entry)


@bp.delete("/<int:entry_id>")
@require_auth
@timing
def delete_entry(entry_id: int):
    """Delete an entry owned by the caller."""

    service = DiaryService()
    with service_errors(service):
        service.delete_entry(current_account_id(), entry_id)
    return "", HTTPStatus.NO_CONTENT
