"""Diary entry repository."""

from __future__ import annotations

from datetime import date
from typing import cast

from sqlalchemy import select

from dalgona.models.diary import DiaryEntry
from dalgona.repositories.base import BaseRepository


class DiaryRepository(BaseRepository[DiaryEntry]):
    model = DiaryEntry
    filterable = {
        "id": DiaryEntry.id,
        "user_id": DiaryEntry.user_id,
        "emotion": DiaryEntry.emotion,
        "type": DiaryEntry.type,
        "date": DiaryEntry.date,
    }
    sortable = {
        "date": DiaryEntry.date,
        "created_at": DiaryEntry.created_at,
        "title": DiaryEntry.title,
    }
    updatable = frozenset({"title", "date", "emotion", "type", "contents", "draw"})

    def list_between(
        self,
        user_id: int,
        start: date,
        end: date,
        *,
        sort: list[str] | None = None,
    ) -> list[DiaryEntry]:
        """Entries of ``user_id`` dated within ``[start, end]`` (inclusive).

        :param user_id: Owning account id.
        :param start: First day of the range.
        :param end: Last day of the range.
        :param sort: Public sort tokens; newest first when omitted.
        :rtype: list[DiaryEntry]
        """
        stmt = select(DiaryEntry).where(
            DiaryEntry.user_id == user_id,
            DiaryEntry.date.between(start, end),
        )
        stmt = self.order_by(stmt, sort or ["-date"])
        return cast(list[DiaryEntry], list(self.session.execute(stmt).scalars()))
