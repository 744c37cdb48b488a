"""
MonthlyEmotionAggregator
========================

Counts how a user's diary entries in a period split across the five emotion
categories. Reads go through the :class:`RecordStore` port so the same code
serves the SQL store and the in-memory doubles used in tests.
"""

from __future__ import annotations

import logging
from collections import Counter

from dalgona.services._shared.dto import DateRange
from dalgona.services._shared.ports.record_store import RecordStore, RowFilter
from dalgona.services._shared.result import Failure
from dalgona.services.emotions.dto import Emotion, EmotionTally

log = logging.getLogger(__name__)

DIARY_COLLECTION = "diary"


class MonthlyEmotionAggregator:
    """
    Reduce diary rows to an :class:`EmotionTally`.

    :param store: Record store holding the ``diary`` collection.
    :type store: RecordStore
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def aggregate(self, user_id: int, period: DateRange) -> EmotionTally | None:
        """
        Tally the emotions of ``user_id``'s entries dated within ``period``.

        :param user_id: Account whose entries are counted.
        :type user_id: int
        :param period: Inclusive date range, e.g. ``DateRange.month(2024, 5)``.
        :type period: DateRange
        :returns: The tally, or ``None`` when the store could not be queried.
            ``None`` means "unavailable" and is distinct from an all-zero tally.
        :rtype: EmotionTally | None
        """
        result = self.store.select(
            DIARY_COLLECTION,
            RowFilter(
                equals={"user_id": user_id},
                date_column="date",
                date_range=period,
                columns=("emotion",),
            ),
        )
        if isinstance(result, Failure):
            log.error(
                "Emotion query failed for user %s (%s..%s): %s",
                user_id,
                period.start.isoformat(),
                period.end.isoformat(),
                result.message,
                extra={"account_id": user_id, "collection": DIARY_COLLECTION},
            )
            return None

        counts: Counter[Emotion] = Counter()
        for row in result.value:
            emotion = Emotion.from_label(row.get("emotion"))
            if emotion is not None:
                counts[emotion] += 1

        return EmotionTally(**{emotion.key: counts[emotion] for emotion in Emotion})
