"""Unit tests for ``DiaryService`` using factories and the transactional session."""

from __future__ import annotations

from datetime import date

import pytest

from dalgona.services._shared.dto import DateRange
from dalgona.services._shared.errors import AuthorizationError, NotFoundError, ServiceError
from dalgona.services.diary.dto import DiaryEntryIn, DiaryEntryUpdateIn, korean_date_label
from dalgona.services.diary.service import DiaryService
from tests.factories.account import AccountFactory
from tests.factories.diary import DiaryEntryFactory


@pytest.fixture()
def service():
    return DiaryService()


@pytest.fixture()
def owner(session):
    return AccountFactory()


class TestDiaryService:
    def test_create_and_get(self, service, owner):
        created = service.create_entry(
            owner.id,
            DiaryEntryIn(title="  소풍  ", date=date(2024, 5, 5), emotion="기쁨", contents="김밥"),
        )

        assert created.id is not None
        assert created.title == "소풍"
        assert created.type == "text"
        assert created.date_label == "2024년 5월 5일"

        fetched = service.get_entry(owner.id, created.id)
        assert fetched.contents == "김밥"
        assert fetched.user_id == owner.id

    def test_create_rejects_blank_emotion(self, service, owner):
        with pytest.raises(ServiceError):
            service.create_entry(
                owner.id, DiaryEntryIn(title="t", date=date(2024, 5, 5), emotion="  ")
            )

    def test_list_entries_is_month_scoped_and_newest_first(self, service, owner):
        DiaryEntryFactory(user_id=owner.id, date=date(2024, 5, 3))
        DiaryEntryFactory(user_id=owner.id, date=date(2024, 5, 20))
        DiaryEntryFactory(user_id=owner.id, date=date(2024, 6, 1))
        DiaryEntryFactory(date=date(2024, 5, 10))  # someone else

        items = service.list_entries(owner.id, DateRange.month(2024, 5))

        assert [i.date for i in items] == [date(2024, 5, 20), date(2024, 5, 3)]

    def test_update_entry(self, service, owner):
        entry = DiaryEntryFactory(user_id=owner.id, emotion="기쁨")

        updated = service.update_entry(
            owner.id, entry.id, DiaryEntryUpdateIn(fields={"emotion": "힘들어요", "title": "수정"})
        )

        assert updated.emotion == "힘들어요"
        assert updated.title == "수정"

    def test_update_rejects_unknown_field(self, service, owner):
        entry = DiaryEntryFactory(user_id=owner.id)
        with pytest.raises(ServiceError):
            service.update_entry(owner.id, entry.id, DiaryEntryUpdateIn(fields={"user_id": 999}))

    def test_delete_entry(self, service, owner):
        entry = DiaryEntryFactory(user_id=owner.id)
        entry_id = entry.id

        service.delete_entry(owner.id, entry_id)

        with pytest.raises(NotFoundError):
            service.get_entry(owner.id, entry_id)

    def test_other_accounts_entry_is_forbidden(self, service, owner):
        foreign = DiaryEntryFactory()

        with pytest.raises(AuthorizationError):
            service.get_entry(owner.id, foreign.id)
        with pytest.raises(AuthorizationError):
            service.delete_entry(owner.id, foreign.id)

    def test_missing_entry(self, service, owner):
        with pytest.raises(NotFoundError):
            service.get_entry(owner.id, 987654)


def test_korean_date_label_has_no_zero_padding():
    assert korean_date_label(date(2024, 1, 9)) == "2024년 1월 9일"
