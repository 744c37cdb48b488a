"""DTOs for the monthly emotion summary."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from dalgona.services._shared.dto import DateRange


class Emotion(str, Enum):
    """
    The five emotion categories a diary entry can carry.

    Values are the exact labels stored on diary rows.
    """

    HAPPY = "기쁨"
    GOOD = "좋아요"
    SOSO = "그냥 그래요"
    BAD = "별로에요"
    TIRED = "힘들어요"

    @property
    def key(self) -> str:
        """Lower-case tally key (``happy``, ``good``...)."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: object) -> Emotion | None:
        """Return the category whose label equals ``label`` exactly, else ``None``."""
        for emotion in cls:
            if emotion.value == label:
                return emotion
        return None


EMOTION_LABELS: tuple[str, ...] = tuple(e.value for e in Emotion)


@dataclass(frozen=True, slots=True)
class EmotionTally:
    """
    Per-category diary counts for one account and period.

    :param happy: Entries labelled ``기쁨``.
    :param good: Entries labelled ``좋아요``.
    :param soso: Entries labelled ``그냥 그래요``.
    :param bad: Entries labelled ``별로에요``.
    :param tired: Entries labelled ``힘들어요``.
    """

    happy: int = 0
    good: int = 0
    soso: int = 0
    bad: int = 0
    tired: int = 0

    @property
    def total(self) -> int:
        return self.happy + self.good + self.soso + self.bad + self.tired

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MonthlyEmotionOut:
    """
    Tally plus the period it covers, as returned by the API.

    :param period: Inclusive range that was counted.
    :param tally: Category counts.
    """

    period: DateRange
    tally: EmotionTally


__all__ = ["DateRange", "Emotion", "EMOTION_LABELS", "EmotionTally", "MonthlyEmotionOut"]
