from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from dalgona.services._shared.dto import DateRange
from dalgona.services._shared.result import Result

Row = dict[str, Any]


@dataclass(frozen=True, slots=True)
class RowFilter:
    """
    Selection criteria for :meth:`RecordStore.select`.

    :param equals: ``column -> value`` equality conditions, all AND-ed.
    :param date_column: Column tested against ``date_range``.
    :param date_range: Inclusive day range the ``date_column`` must fall in.
    :param columns: Columns to return; empty means every column.
    """

    equals: Mapping[str, Any] = field(default_factory=dict)
    date_column: str = "date"
    date_range: DateRange | None = None
    columns: tuple[str, ...] = ()


class RecordStore(Protocol):
    """Port for the table store holding ``users`` and ``diary`` rows."""

    def insert(self, collection: str, row: Mapping[str, Any]) -> Result[Row]:
        """Insert one row and return it as stored."""
        ...

    def select(self, collection: str, row_filter: RowFilter) -> Result[list[Row]]:
        """Return the rows of ``collection`` matching ``row_filter``."""
        ...
