"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from marshmallow import Schema, fields, post_load, validate

from dalgona.services._shared.dto import DateRange


class BaseSchema(Schema):
    """Base schema enabling ordered output for consistent API responses."""

    class Meta:
        ordered = True


class MonthQuerySchema(Schema):
    """
    Parse ``year``/``month`` query parameters into a :class:`DateRange`.

    Missing values default to the current UTC month.
    """

    year = fields.Integer(validate=validate.Range(min=1900, max=9999))
    month = fields.Integer(validate=validate.Range(min=1, max=12))

    @post_load
    def to_period(self, data: dict[str, Any], **_: Any) -> DateRange:
        today = datetime.now(UTC).date()
        return DateRange.month(data.get("year", today.year), data.get("month", today.month))


class PeriodSchema(BaseSchema):
    """Serialize a :class:`DateRange`."""

    start = fields.Date()
    end = fields.Date()
