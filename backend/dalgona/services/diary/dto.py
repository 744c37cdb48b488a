"""DTOs for diary entry use cases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class DiaryEntryIn:
    """
    Input for creating a diary entry.

    :param title: Entry title.
    :type title: str
    :param date: Day the entry is about.
    :type date: datetime.date
    :param emotion: One of the five emotion labels (e.g. ``기쁨``).
    :type emotion: str
    :param contents: Free text body.
    :type contents: str
    :param type: Entry kind; ``text`` unless the client drew something.
    :type type: str
    :param draw: Serialized drawing, when the entry has one.
    :type draw: str | None
    """

    title: str
    date: date
    emotion: str
    contents: str = ""
    type: str = "text"
    draw: str | None = None


@dataclass(frozen=True, slots=True)
class DiaryEntryUpdateIn:
    """
    Partial update of a diary entry.

    :param fields: Whitelisted ``column -> value`` updates.
    :type fields: Mapping[str, Any]
    """

    fields: Mapping[str, Any] = field(default_factory=dict)


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class DiaryEntryOut:
    """
    Public projection of a diary row.

    :param id: Primary key.
    :param user_id: Owning account.
    :param title: Entry title.
    :param date: Day the entry is about.
    :param emotion: Emotion label.
    :param type: Entry kind.
    :param contents: Body text.
    :param draw: Drawing payload or ``None``.
    :param created_at: Creation timestamp.
    :param updated_at: Last update timestamp.
    """

    id: int
    user_id: int
    title: str
    date: date
    emotion: str
    type: str
    contents: str
    draw: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def date_label(self) -> str:
        """Korean long date, e.g. ``2024년 5월 3일``."""
        return korean_date_label(self.date)


def korean_date_label(day: date) -> str:
    return f"{day.year}년 {day.month}월 {day.day}일"
