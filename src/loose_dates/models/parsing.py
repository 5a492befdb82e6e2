"""Per-call parsing models.

``ParsePosition`` is owned by the caller and carries the anchor offset
between successive calls; ``PartialDate`` and ``ParseOutcome`` are created
for a single call and handed straight back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime, timedelta
from enum import IntFlag, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class FieldMask(IntFlag):
    """Bitset over the three date fields."""

    NONE = 0
    DAY = 1
    MONTH = 2
    YEAR = 4
    ALL = DAY | MONTH | YEAR


class Relative(StrEnum):
    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class ParsePosition(BaseModel):
    """Cursor into the text being parsed.

    ``index`` only moves when a date is found. ``features`` stays ``None``
    unless the caller asks for extended metadata, in which case the parser
    records ``relative``, ``inferred`` and ``accurate`` into it.
    """

    model_config = ConfigDict(validate_assignment=True)

    index: int = Field(default=0, ge=0)
    features: dict[str, Any] | None = None

    @classmethod
    def extended(cls, index: int = 0, features: dict[str, Any] | None = None) -> ParsePosition:
        """Build a position that collects metadata, seeded with *features*."""
        return cls(index=index, features=dict(features or {}))

    @property
    def wants_features(self) -> bool:
        return self.features is not None

    def record(self, key: str, value: Any) -> None:
        if self.wants_features:
            self.features[key] = value

    def reset(self, index: int = 0) -> ParsePosition:
        """Move back to *index* and forget any collected metadata."""
        self.index = index
        if self.features is not None:
            self.features.clear()
        return self


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseOutcome:
    """A resolved date plus what was inferred to get there."""

    value: datetime
    inferred: FieldMask
    accurate: FieldMask
    end: int
    recognizer: str = ""

    def relative_to(self, reference: datetime) -> Relative:
        if self.value < reference:
            return Relative.PAST
        if self.value > reference:
            return Relative.FUTURE
        return Relative.PRESENT


@dataclass(frozen=True)
class PartialDate:
    """Date fields pulled out of a match; ``None`` means absent from the text.

    Month is zero based. Day is only range checked (1-31), never against the
    length of the actual month.
    """

    month: int
    day: int | None = None
    year: int | None = None
    accurate: FieldMask = FieldMask.ALL

    @property
    def inferred(self) -> FieldMask:
        mask = FieldMask.NONE
        if self.day is None:
            mask |= FieldMask.DAY
        if self.year is None:
            mask |= FieldMask.YEAR
        return mask

    def is_valid(self) -> bool:
        if not 0 <= self.month <= 11:
            return False
        if self.day is not None and not 1 <= self.day <= 31:
            return False
        return self.year is None or MINYEAR <= self.year <= MAXYEAR

    def resolve(self, reference: datetime, end: int) -> ParseOutcome | None:
        """Fill absent fields from *reference*; ``None`` if the fields are invalid.

        Days past the end of the month roll into the next one, so
        "30 February" lands in early March rather than being rejected.
        """
        if not self.is_valid():
            return None
        year = reference.year if self.year is None else self.year
        day = 1 if self.day is None else self.day
        try:
            value = reference.replace(year=year, month=self.month + 1, day=1) + timedelta(days=day - 1)
        except OverflowError:
            return None
        return ParseOutcome(
            value=value,
            inferred=self.inferred,
            accurate=self.accurate,
            end=end,
        )
