"""Literal relative keywords ("today", "last month", ...) tried before the table."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Callable
import structlog
from ..international import calendar_math
from ..models.locale import LocaleContext
from ..models.parsing import FieldMask, ParseOutcome

logger = structlog.get_logger(__name__)

# (reference, first_week_day) -> resolved
Shift = Callable[[datetime, int], datetime]


@dataclass(frozen=True)
class RelativeKeyword:
    literal: str
    shift: Shift
    accurate: FieldMask


RELATIVE_KEYWORDS: tuple[RelativeKeyword, ...] = (
    RelativeKeyword("today", lambda ref, fwd: ref, FieldMask.ALL),
    RelativeKeyword("tomorrow", lambda ref, fwd: calendar_math.shift_days(ref, 1), FieldMask.ALL),
    RelativeKeyword("yesterday", lambda ref, fwd: calendar_math.shift_days(ref, -1), FieldMask.ALL),
    RelativeKeyword("previous day", lambda ref, fwd: calendar_math.shift_days(ref, -1), FieldMask.ALL),
    RelativeKeyword(
        "last week",
        lambda ref, fwd: calendar_math.shift_weeks_to_start(ref, -1, fwd),
        FieldMask.YEAR | FieldMask.MONTH,
    ),
    RelativeKeyword(
        "next week",
        lambda ref, fwd: calendar_math.shift_weeks_to_start(ref, 1, fwd),
        FieldMask.YEAR | FieldMask.MONTH,
    ),
    RelativeKeyword(
        "last month",
        lambda ref, fwd: calendar_math.shift_months_to_first(ref, -1),
        FieldMask.YEAR | FieldMask.MONTH,
    ),
    RelativeKeyword(
        "next month",
        lambda ref, fwd: calendar_math.shift_months_to_first(ref, 1),
        FieldMask.YEAR | FieldMask.MONTH,
    ),
    RelativeKeyword("last year", lambda ref, fwd: calendar_math.shift_years_to_new_year(ref, -1), FieldMask.YEAR),
    RelativeKeyword("next year", lambda ref, fwd: calendar_math.shift_years_to_new_year(ref, 1), FieldMask.YEAR),
)

# Words that introduce a relative date, beyond the locale's own names
RELATIVE_WORDS = frozenset({"last", "next", "previous", "today", "tomorrow", "yesterday"})


def match_relative_keyword(
    text: str, anchor: int, locale: LocaleContext, reference: datetime
) -> ParseOutcome | None:
    """Resolve the first keyword that *text* starts with at *anchor*, if any."""
    for keyword in RELATIVE_KEYWORDS:
        if text[anchor:anchor + len(keyword.literal)].lower() != keyword.literal:
            continue
        try:
            value = keyword.shift(reference, locale.first_week_day)
        except (OverflowError, ValueError):
            # Stepping past year 1 or 9999
            logger.debug("relative_keyword_out_of_range", keyword=keyword.literal)
            return None
        logger.debug("relative_keyword_matched", keyword=keyword.literal, anchor=anchor)
        return ParseOutcome(
            value=value,
            inferred=FieldMask.ALL,
            accurate=keyword.accurate,
            end=anchor + len(keyword.literal),
            recognizer=keyword.literal,
        )
    return None
