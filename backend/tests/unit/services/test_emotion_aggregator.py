"""Unit tests for the monthly emotion tally."""

from __future__ import annotations

from datetime import date

import pytest

from dalgona.services._shared.dto import DateRange
from dalgona.services.emotions.dto import Emotion, EmotionTally
from dalgona.services.emotions.service import DIARY_COLLECTION, MonthlyEmotionAggregator
from tests.helpers.fakes import FakeRecordStore, unavailable

MAY_2024 = DateRange.month(2024, 5)


def _row(user_id: int, day: date, emotion: str) -> dict:
    return {"user_id": user_id, "date": day, "emotion": emotion, "title": "t"}


@pytest.fixture()
def store():
    return FakeRecordStore()


class TestMonthlyEmotionAggregator:
    def test_counts_known_labels_and_ignores_unknown(self, store):
        store.tables[DIARY_COLLECTION] = [
            _row(1, date(2024, 5, 1), "기쁨"),
            _row(1, date(2024, 5, 2), "기쁨"),
            _row(1, date(2024, 5, 3), "좋아요"),
            _row(1, date(2024, 5, 4), "unknown"),
            _row(1, date(2024, 5, 5), "힘들어요"),
        ]

        tally = MonthlyEmotionAggregator(store).aggregate(1, MAY_2024)

        assert tally == EmotionTally(happy=2, good=1, soso=0, bad=0, tired=1)
        assert tally.total == 4

    def test_no_entries_is_all_zero_not_none(self, store):
        tally = MonthlyEmotionAggregator(store).aggregate(1, MAY_2024)
        assert tally == EmotionTally()
        assert tally.as_dict() == {"happy": 0, "good": 0, "soso": 0, "bad": 0, "tired": 0}

    def test_only_counts_owner_and_period(self, store):
        store.tables[DIARY_COLLECTION] = [
            _row(1, date(2024, 5, 31), "별로에요"),
            _row(1, date(2024, 6, 1), "별로에요"),
            _row(1, date(2024, 4, 30), "별로에요"),
            _row(2, date(2024, 5, 15), "별로에요"),
        ]

        tally = MonthlyEmotionAggregator(store).aggregate(1, MAY_2024)

        assert tally == EmotionTally(bad=1)

    def test_queries_only_the_emotion_column(self, store):
        MonthlyEmotionAggregator(store).aggregate(7, MAY_2024)

        [(collection, row_filter)] = store.selects
        assert collection == DIARY_COLLECTION
        assert dict(row_filter.equals) == {"user_id": 7}
        assert row_filter.date_range == MAY_2024
        assert row_filter.columns == ("emotion",)

    def test_store_failure_returns_none(self, store):
        store.select_failure = unavailable()
        assert MonthlyEmotionAggregator(store).aggregate(1, MAY_2024) is None


class TestEmotion:
    def test_from_label_is_exact(self):
        assert Emotion.from_label("그냥 그래요") is Emotion.SOSO
        assert Emotion.from_label("그냥그래요") is None
        assert Emotion.from_label(None) is None

    def test_keys(self):
        assert [e.key for e in Emotion] == ["happy", "good", "soso", "bad", "tired"]


class TestDateRange:
    def test_month_covers_every_day(self):
        assert DateRange.month(2024, 2) == DateRange(date(2024, 2, 1), date(2024, 2, 29))
        assert DateRange.month(2023, 12).end == date(2023, 12, 31)

    def test_contains_is_inclusive(self):
        assert date(2024, 5, 1) in MAY_2024
        assert date(2024, 5, 31) in MAY_2024
        assert date(2024, 6, 1) not in MAY_2024

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError):
            DateRange(date(2024, 5, 2), date(2024, 5, 1))
