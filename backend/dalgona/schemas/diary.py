"""Diary entry Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, post_load, validate

from dalgona.schemas.common import BaseSchema
from dalgona.services.diary.dto import DiaryEntryIn, DiaryEntryUpdateIn
from dalgona.services.emotions.dto import EMOTION_LABELS

_emotion_field_kwargs = {"validate": validate.OneOf(EMOTION_LABELS)}


class DiaryEntrySchema(BaseSchema):
    """Serialize :class:`~dalgona.services.diary.dto.DiaryEntryOut`."""

    id = fields.Integer(dump_only=True)
    user_id = fields.Integer(dump_only=True)
    title = fields.String()
    date = fields.Date()
    date_label = fields.String(dump_only=True)
    emotion = fields.String()
    type = fields.String()
    contents = fields.String()
    draw = fields.String(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class DiaryEntryCreateSchema(Schema):
    """Validate payloads when creating diary entries."""

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    date = fields.Date(required=True)
    emotion = fields.String(required=True, **_emotion_field_kwargs)
    type = fields.String(load_default="text", validate=validate.Length(min=1, max=20))
    contents = fields.String(load_default="")
    draw = fields.String(load_default=None, allow_none=True)

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> DiaryEntryIn:
        return DiaryEntryIn(**data)


class DiaryEntryUpdateSchema(Schema):
    """Schema for partial diary entry updates."""

    title = fields.String(validate=validate.Length(min=1, max=200))
    date = fields.Date()
    emotion = fields.String(**_emotion_field_kwargs)
    type = fields.String(validate=validate.Length(min=1, max=20))
    contents = fields.String()
    draw = fields.String(allow_none=True)

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> DiaryEntryUpdateIn:
        return DiaryEntryUpdateIn(fields=data)
