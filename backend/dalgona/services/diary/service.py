# dalgona/services/diary/service.py
from __future__ import annotations

import logging

from dalgona.models.diary import DiaryEntry
from dalgona.repositories.diary import DiaryRepository
from dalgona.services._shared.base import BaseService
from dalgona.services._shared.dto import DateRange
from dalgona.services._shared.errors import NotFoundError, ServiceError
from dalgona.services.diary.dto import DiaryEntryIn, DiaryEntryOut, DiaryEntryUpdateIn

log = logging.getLogger(__name__)


class DiaryService(BaseService):
    """
    Application service for an account's own diary entries.

    Responsibilities
    ----------------
    - Create/read/update/delete entries owned by the caller.
    - List one period of entries, newest day first.

    Notes
    -----
    - Framework-agnostic; the API layer maps the raised service errors.
    - Every read or write checks ownership with :meth:`ensure_owner`.
    """

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_entry(self, account_id: int, dto: DiaryEntryIn) -> DiaryEntryOut:
        """
        Persist a new entry for ``account_id``.

        :param account_id: Authenticated account.
        :type account_id: int
        :param dto: Entry values.
        :type dto: :class:`DiaryEntryIn`
        :returns: Stored entry.
        :rtype: :class:`DiaryEntryOut`
        :raises ServiceError: When a value is rejected by the model.
        """
        with self.rw_uow() as uow:
            repo: DiaryRepository = uow.diaries
            try:
                row = DiaryEntry(
                    user_id=account_id,
                    title=dto.title.strip(),
                    date=dto.date,
                    emotion=dto.emotion,
                    type=dto.type or "text",
                    contents=dto.contents,
                    draw=dto.draw,
                )
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            repo.add(row)
            log.info("Diary entry created", extra={"account_id": account_id})
            return self._to_out(row)

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get_entry(self, account_id: int, entry_id: int) -> DiaryEntryOut:
        """
        Load one entry.

        :raises NotFoundError: When the entry does not exist.
        :raises AuthorizationError: When it belongs to another account.
        """
        with self.ro_uow() as uow:
            row = self._get_owned(uow.diaries, account_id, entry_id)
            return self._to_out(row)

    def list_entries(self, account_id: int, period: DateRange) -> list[DiaryEntryOut]:
        """
        List the caller's entries dated within ``period`` (inclusive), newest first.

        :param account_id: Authenticated account.
        :param period: Inclusive date range.
        :rtype: list[:class:`DiaryEntryOut`]
        """
        with self.ro_uow() as uow:
            repo: DiaryRepository = uow.diaries
            rows = repo.list_between(account_id, period.start, period.end)
            return [self._to_out(r) for r in rows]

    # ------------------------------------------------------------------ #
    # Update / delete
    # ------------------------------------------------------------------ #

    def update_entry(
        self, account_id: int, entry_id: int, dto: DiaryEntryUpdateIn
    ) -> DiaryEntryOut:
        """
        Apply whitelisted updates.

        :raises NotFoundError: When the entry does not exist.
        :raises AuthorizationError: When it belongs to another account.
        :raises ServiceError: On unknown fields or rejected values.
        """
        with self.rw_uow() as uow:
            repo: DiaryRepository = uow.diaries
            row = self._get_owned(repo, account_id, entry_id)
            try:
                repo.assign_updates(row, dict(dto.fields), strict=True, flush=True)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            return self._to_out(row)

    def delete_entry(self, account_id: int, entry_id: int) -> None:
        """
        Delete an entry.

        :raises NotFoundError: When the entry does not exist.
        :raises AuthorizationError: When it belongs to another account.
        """
        with self.rw_uow() as uow:
            repo: DiaryRepository = uow.diaries
            row = self._get_owned(repo, account_id, entry_id)
            repo.delete(row)
            log.info("Diary entry deleted", extra={"account_id": account_id})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _get_owned(self, repo: DiaryRepository, account_id: int, entry_id: int) -> DiaryEntry:
        row = repo.get(entry_id)
        if row is None:
            raise NotFoundError("DiaryEntry", entry_id)
        self.ensure_owner(account_id, row.user_id)
        return row

    @staticmethod
    def _to_out(row: DiaryEntry) -> DiaryEntryOut:
        return DiaryEntryOut(
            id=row.id,
            user_id=row.user_id,
            title=row.title,
            date=row.date,
            emotion=row.emotion,
            type=row.type,
            contents=row.contents,
            draw=row.draw,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
