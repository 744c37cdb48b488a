"""Monthly emotion summary schema."""

from __future__ import annotations

from marshmallow import fields

from dalgona.schemas.common import BaseSchema, PeriodSchema


class EmotionTallySchema(BaseSchema):
    """Serialize an :class:`~dalgona.services.emotions.dto.EmotionTally`."""

    happy = fields.Integer()
    good = fields.Integer()
    soso = fields.Integer()
    bad = fields.Integer()
    tired = fields.Integer()
    total = fields.Integer(dump_only=True)


class MonthlyEmotionSchema(BaseSchema):
    """Serialize a :class:`~dalgona.services.emotions.dto.MonthlyEmotionOut`."""

    period = fields.Nested(PeriodSchema)
    tally = fields.Nested(EmotionTallySchema)
