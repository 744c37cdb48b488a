"""Identity account issued at sign-up."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from dalgona.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

EMAIL_MAX_LENGTH = 254


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Login identity owned by the identity provider.

    Only credentials live here. The public profile (nickname, name) is a
    separate row in ``users`` keyed by the same id, written after the
    account exists.

    Fields
    ------
    email : str
        Login email, stored lowercased and trimmed.
    password_hash : str
        Werkzeug password hash (write via ``password``).
    token_version : int
        Reserved for global session invalidation.
    """

    __tablename__ = "accounts"
    __repr_fields__ = ("email",)

    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    token_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (UniqueConstraint("email", name="uq_accounts_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """Passwords are write-only."""
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """Lowercase and trim the email; reject empty values."""
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v:
            raise ValueError("Email format looks invalid.")
        return v
