"""Demo rows for local development; running the seeders twice changes nothing."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import date
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from dalgona.models.account import Account
from dalgona.models.diary import DiaryEntry
from dalgona.models.profile import UserProfile

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

ACCOUNT_FIXTURES: list[dict[str, str]] = [
    {
        "email": "dalgona.demo@example.com",
        "password": "devPass123!",
        "nickname": "달고나",
        "name": "김달고",
    },
    {
        "email": "haru.park@example.com",
        "password": "haruDiary1$",
        "nickname": "하루",
        "name": "박하루",
    },
]

DIARY_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "dalgona.demo@example.com",
        "date": date(2024, 5, 1),
        "title": "오월의 첫날",
        "emotion": "기쁨",
        "contents": "날씨가 좋아서 한강에 다녀왔다.",
    },
    {
        "email": "dalgona.demo@example.com",
        "date": date(2024, 5, 3),
        "title": "비 오는 날",
        "emotion": "그냥 그래요",
        "contents": "하루 종일 집에서 책을 읽었다.",
    },
    {
        "email": "dalgona.demo@example.com",
        "date": date(2024, 5, 8),
        "title": "어버이날",
        "emotion": "좋아요",
        "contents": "부모님께 카네이션을 드렸다.",
    },
    {
        "email": "dalgona.demo@example.com",
        "date": date(2024, 5, 20),
        "title": "야근",
        "emotion": "힘들어요",
        "contents": "마감 때문에 늦게까지 일했다.",
        "type": "draw",
        "draw": "data:image/png;base64,iVBORw0KGgo=",
    },
    {
        "email": "haru.park@example.com",
        "date": date(2024, 5, 2),
        "title": "첫 일기",
        "emotion": "별로에요",
        "contents": "감기 기운이 있다.",
    },
]


Summary = dict[str, dict[str, int]]


class _Tally:
    """Per-table ``created``/``existing`` counters reported by the CLI."""

    def __init__(self) -> None:
        self.counts: dict[str, Counter[str]] = defaultdict(Counter)

    def record(self, table: str, created: bool) -> None:
        self.counts[table]["created" if created else "existing"] += 1

    def merge(self, other: Summary) -> None:
        for table, counters in other.items():
            self.counts[table].update(counters)

    def as_dict(self) -> Summary:
        return {
            table: {"created": c["created"], "existing": c["existing"]}
            for table, c in self.counts.items()
        }


def _find(session: Session, model: type[T], **filters: Any) -> T | None:
    return session.execute(select(model).filter_by(**filters)).scalar_one_or_none()


def _ensure(session: Session, model: type[T], key: dict[str, Any], values: dict[str, Any]) -> tuple[T, bool]:
    """Return the row matching ``key``, inserting ``key | values`` when absent."""
    row = _find(session, model, **key)
    if row is not None:
        return row, False
    row = model(**key, **values)
    session.add(row)
    return row, True


def seed_accounts_and_profiles(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """Create the demo accounts plus the profile row sign-up would have written."""
    session = cast(Session, database.session)
    tally = _Tally()
    with session.begin():
        for fixture in ACCOUNT_FIXTURES:
            email = fixture["email"].strip().lower()
            account = _find(session, Account, email=email)
            tally.record("accounts", account is None)
            if account is None:
                account = Account(email=email)
                account.password = fixture["password"]
                session.add(account)
                session.flush()
            _, created = _ensure(
                session,
                UserProfile,
                {"id": account.id},
                {"email": email, "nickname": fixture["nickname"], "name": fixture["name"]},
            )
            tally.record("users", created)
            if verbose:
                LOGGER.info("account %s ready (id=%s)", email, account.id)
    return tally.as_dict()


def seed_diary_entries(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """
    Create the demo diary month. Entries are matched on
    ``(user_id, date, title)``, so editing contents does not duplicate them.

    :raises RuntimeError: When a fixture names an account that is not seeded.
    """
    session = cast(Session, database.session)
    tally = _Tally()
    with session.begin():
        for fixture in DIARY_FIXTURES:
            email = fixture["email"]
            account = _find(session, Account, email=email)
            if account is None:
                raise RuntimeError(f"Diary fixture references unknown account {email!r}")
            _, created = _ensure(
                session,
                DiaryEntry,
                {"user_id": account.id, "date": fixture["date"], "title": fixture["title"]},
                {
                    "emotion": fixture["emotion"],
                    "contents": fixture.get("contents", ""),
                    "type": fixture.get("type", "text"),
                    "draw": fixture.get("draw"),
                },
            )
            tally.record("diary", created)
            if verbose:
                LOGGER.info("diary %s %s: %s", email, fixture["date"], "created" if created else "kept")
    return tally.as_dict()


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """Accounts first, then the entries that reference them."""
    tally = _Tally()
    for seeder in (seed_accounts_and_profiles, seed_diary_entries):
        tally.merge(seeder(database, verbose=verbose))
    return tally.as_dict()


__all__ = ["run_all", "seed_accounts_and_profiles", "seed_diary_entries"]
