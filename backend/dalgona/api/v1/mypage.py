"""My-page endpoints: monthly emotion summary."""

from __future__ import annotations

from flask import Blueprint, request

from dalgona.api.deps import current_account_id, get_record_store, json_response, require_auth, timing
from dalgona.core.errors import ServiceUnavailable
from dalgona.schemas import MonthlyEmotionSchema, MonthQuerySchema
from dalgona.services.emotions.dto import MonthlyEmotionOut
from dalgona.services.emotions.service import MonthlyEmotionAggregator

bp = Blueprint("mypage", __name__)

month_query_schema = MonthQuerySchema()
monthly_emotion_schema = MonthlyEmotionSchema()


@bp.get("/emotions")
@require_auth
@timing
def monthly_emotions():
    """Count the caller's entries per emotion for ``year``/``month`` (default: this month)."""

    period = month_query_schema.load(request.args)
    tally = MonthlyEmotionAggregator(get_record_store()).aggregate(current_account_id(), period)
    if tally is None:
        raise ServiceUnavailable(
            "Emotion summary is temporarily unavailable",
            code="emotion_summary_unavailable",
        )
    out = MonthlyEmotionOut(period=period, tally=tally)
    return json_response({"data": monthly_emotion_schema.dump(out)})
