"""Diary entry model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from dalgona.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class DiaryEntry(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One dated diary entry tagged with an emotion label.

    Fields
    ------
    user_id : int
        Owning account id.
    title : str
        Entry title.
    date : datetime.date
        Calendar day the entry is about (not the creation time).
    emotion : str
        Emotion label as chosen by the writer (e.g. ``"기쁨"``). Stored
        verbatim; unknown labels are kept and simply not counted by the
        monthly summary.
    type : str
        Entry kind (``"text"`` or ``"draw"`` in the web client).
    contents : str
        Body text.
    draw : str | None
        Optional drawing payload (data URL or storage key).
    """

    __tablename__ = "diary"
    __repr_fields__ = ("date", "emotion")

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    date: Mapped[date] = mapped_column(Date, nullable=False)
    emotion: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="text")
    contents: Mapped[str] = mapped_column(Text, nullable=False, default="")
    draw: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_diary_user_id_date", "user_id", "date"),)

    @validates("emotion")
    def _strip_emotion(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Emotion is required.")
        return value.strip()
