"""Public user profile created right after the account."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dalgona.core.extensions import db

from .account import EMAIL_MAX_LENGTH
from .base import ReprMixin, TimestampMixin


class UserProfile(ReprMixin, TimestampMixin, db.Model):
    """
    Row of the ``users`` collection.

    Keyed by the account id handed out by the identity provider. The row is
    inserted once at sign-up and never rewritten by the registration flow.
    """

    __tablename__ = "users"
    __repr_fields__ = ("nickname",)

    id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    nickname: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
