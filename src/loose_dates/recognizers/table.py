"""Ordered table of date-shape recognizers.

Each row pairs a pattern with an extractor. Rows are tried in order and a
row only counts when its pattern matches exactly at the anchor; an
extractor returns ``None`` when the matched text does not hold a valid
date, and the next row is tried.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable
import regex as re
import structlog
from ..international import calendar_math
from ..models.locale import LocaleContext
from ..models.parsing import FieldMask, ParseOutcome, PartialDate

logger = structlog.get_logger(__name__)

Extractor = Callable[[re.Match, LocaleContext, datetime], ParseOutcome | None]

# Building blocks
_WORD = r"\p{L}[\p{L}\p{M}]*"  # letters in any script, with their combining marks
_DAY = r"[0-9]{1,2}"
_YEAR = r"([0-9]{4}|[0-9]{2})"
_ORDINAL = r"(?:st|nd|rd|th)"
_LEADING_WEEKDAY = rf"(?:({_WORD})(?:,|\s+the)?\s+)?"

_FLAGS = re.IGNORECASE | re.MULTILINE


@dataclass(frozen=True)
class Recognizer:
    name: str
    pattern: re.Pattern
    extract: Extractor


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, _FLAGS)


def _weekday_known(word: str | None, locale: LocaleContext) -> bool:
    return word is None or locale.lookup_weekday(word) is not None


def _shifted(compute: Callable[[], datetime]) -> datetime | None:
    try:
        return compute()
    except (OverflowError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def _day_month_year(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """31st of August 1979"""
    if not _weekday_known(m.group(1), locale):
        return None
    month = locale.lookup_month(m.group(3))
    if month is None:
        return None
    year = locale.resolve_year(int(m.group(4)))
    return PartialDate(month=month, day=int(m.group(2)), year=year).resolve(reference, m.end())


def _day_month(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """31st August"""
    if not _weekday_known(m.group(1), locale):
        return None
    month = locale.lookup_month(m.group(3))
    if month is None:
        return None
    return PartialDate(month=month, day=int(m.group(2))).resolve(reference, m.end())


def _month_day_year(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """August 31st 1979"""
    if not _weekday_known(m.group(1), locale):
        return None
    month = locale.lookup_month(m.group(2))
    if month is None:
        return None
    year = locale.resolve_year(int(m.group(4)))
    return PartialDate(month=month, day=int(m.group(3)), year=year).resolve(reference, m.end())


def _month_day(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """August 31st"""
    if not _weekday_known(m.group(1), locale):
        return None
    month = locale.lookup_month(m.group(2))
    if month is None:
        return None
    return PartialDate(month=month, day=int(m.group(3))).resolve(reference, m.end())


def _numeric_dmy(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """31/08/1979 or 08/31/1979, depending on the locale's order."""
    first, second = int(m.group(1)), int(m.group(2))
    day, month = (first, second) if locale.day_before_month else (second, first)
    year = locale.resolve_year(int(m.group(3)))
    return PartialDate(month=month - 1, day=day, year=year).resolve(reference, m.end())


def _iso_ymd(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """1979-08-31"""
    partial = PartialDate(month=int(m.group(2)) - 1, day=int(m.group(3)), year=int(m.group(1)))
    return partial.resolve(reference, m.end())


def _day_monthname_year(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """31-Aug-1979"""
    month = locale.lookup_month(m.group(2))
    if month is None:
        return None
    year = locale.resolve_year(int(m.group(3)))
    return PartialDate(month=month, day=int(m.group(1)), year=year).resolve(reference, m.end())


def _weekday_shift(weeks: int) -> Extractor:
    def extract(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
        weekday = locale.lookup_weekday(m.group(1))
        if weekday is None:
            return None
        value = _shifted(
            lambda: calendar_math.weekday_in_week(reference, weekday, locale.first_week_day)
            + timedelta(weeks=weeks)
        )
        if value is None:
            return None
        return ParseOutcome(value=value, inferred=FieldMask.ALL, accurate=FieldMask.NONE, end=m.end())

    return extract


def _month_year(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """July 2009, August '08"""
    month = locale.lookup_month(m.group(1))
    if month is None:
        return None
    year = locale.resolve_year(int(m.group(2)))
    partial = PartialDate(month=month, year=year, accurate=FieldMask.YEAR | FieldMask.MONTH)
    return partial.resolve(reference, m.end())


# unit -> (shift(reference, amount, first_week_day), accurate)
AGO_UNITS: dict[str, tuple[Callable[[datetime, int, int], datetime], FieldMask]] = {
    "day": (lambda ref, n, fwd: calendar_math.shift_days(ref, -n), FieldMask.ALL),
    "week": (lambda ref, n, fwd: calendar_math.shift_weeks_to_start(ref, -n, fwd), FieldMask.YEAR | FieldMask.MONTH),
    "month": (lambda ref, n, fwd: calendar_math.shift_months_to_first(ref, -n), FieldMask.YEAR | FieldMask.MONTH),
    "year": (lambda ref, n, fwd: calendar_math.shift_years_to_new_year(ref, -n), FieldMask.YEAR),
}


def _units_ago(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """3 months ago"""
    unit = m.group(2).lower()
    if unit.endswith("s"):
        unit = unit[:-1]
    if unit not in AGO_UNITS:
        return None
    shift, accurate = AGO_UNITS[unit]
    amount = int(m.group(1))
    value = _shifted(lambda: shift(reference, amount, locale.first_week_day))
    if value is None:
        return None
    return ParseOutcome(value=value, inferred=FieldMask.ALL, accurate=accurate, end=m.end())


def _year_monthname_day(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """2003Nov9, 2003-Nov-9, Sunday

    A trailing word that is not a weekday is left unconsumed.
    """
    month = locale.lookup_month(m.group(2))
    if month is None:
        return None
    partial = PartialDate(month=month, day=int(m.group(3)), year=locale.resolve_year(int(m.group(1))))
    trailing = m.group(4)
    end = m.end() if _weekday_known(trailing, locale) else m.end(3)
    return partial.resolve(reference, end)


def _monthname_day_year(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """Nov/9/2003"""
    month = locale.lookup_month(m.group(1))
    if month is None:
        return None
    return PartialDate(month=month, day=int(m.group(2)), year=int(m.group(3))).resolve(reference, m.end())


def _bare_word(m: re.Match, locale: LocaleContext, reference: datetime) -> ParseOutcome | None:
    """Sunday, August

    Month names only count when not written all lowercase, so the verb
    "may" is not read as a date.
    """
    word = m.group(1)
    weekday = locale.lookup_weekday(word)
    if weekday is not None:
        value = _shifted(lambda: calendar_math.weekday_in_week(reference, weekday, locale.first_week_day))
        if value is None:
            return None
        return ParseOutcome(value=value, inferred=FieldMask.ALL, accurate=FieldMask.NONE, end=m.end())

    month = locale.lookup_month(word)
    if month is None or word.lower() == word:
        return None
    return PartialDate(month=month, accurate=FieldMask.MONTH).resolve(reference, m.end())


# ---------------------------------------------------------------------------
# Table, highest priority first
# ---------------------------------------------------------------------------

RECOGNIZERS: tuple[Recognizer, ...] = (
    Recognizer(
        "day_month_year",
        _compile(rf"{_LEADING_WEEKDAY}({_DAY})\.?\s*{_ORDINAL}?\s+(?:of\s+)?({_WORD}),?\s+{_YEAR}(?=\b)"),
        _day_month_year,
    ),
    Recognizer(
        "day_month",
        _compile(rf"{_LEADING_WEEKDAY}({_DAY})\.?\s*{_ORDINAL}?\s+(?:of\s+)?({_WORD})"),
        _day_month,
    ),
    Recognizer(
        "month_day_year",
        _compile(rf"{_LEADING_WEEKDAY}({_WORD})\.?\s+(?:the\s+)?({_DAY})\s*{_ORDINAL}?,?\s+{_YEAR}(?=\b)"),
        _month_day_year,
    ),
    Recognizer(
        "month_day",
        _compile(rf"{_LEADING_WEEKDAY}({_WORD})\.?\s+(?:the\s+)?({_DAY})(?:\s*{_ORDINAL})?(?=\b)"),
        _month_day,
    ),
    Recognizer(
        "numeric_dmy",
        _compile(rf"({_DAY})[-/.]({_DAY})[-/.]{_YEAR}(?=$|[^0-9])"),
        _numeric_dmy,
    ),
    Recognizer(
        "iso_ymd",
        _compile(rf"([0-9]{{4}})[-/.]\s*({_DAY})[-/.]\s*({_DAY})"),
        _iso_ymd,
    ),
    Recognizer(
        "day_monthname_year",
        _compile(rf"({_DAY})[-/.]({_WORD})[-/.]{_YEAR}"),
        _day_monthname_year,
    ),
    Recognizer("last_weekday", _compile(rf"last\s+({_WORD})"), _weekday_shift(-1)),
    Recognizer("next_weekday", _compile(rf"next\s+({_WORD})"), _weekday_shift(1)),
    Recognizer(
        "month_year",
        _compile(rf"({_WORD})\s+'?{_YEAR}(?=\b)"),
        _month_year,
    ),
    Recognizer(
        "units_ago",
        _compile(rf"({_DAY})\s+({_WORD})\s+ago"),
        _units_ago,
    ),
    Recognizer(
        "year_monthname_day",
        _compile(rf"([0-9]{{4}})[-.]?\s*({_WORD})[-.]?\s*({_DAY})(?:,?\s+({_WORD}))?"),
        _year_monthname_day,
    ),
    Recognizer(
        "monthname_day_year",
        _compile(rf"({_WORD})[-/.]({_DAY})[-/.]([0-9]{{4}})(?=$|[^0-9])"),
        _monthname_day_year,
    ),
    Recognizer("bare_word", _compile(rf"({_WORD})(?=\b)"), _bare_word),
)


def try_recognizers(
    text: str, anchor: int, locale: LocaleContext, reference: datetime
) -> ParseOutcome | None:
    """Return the outcome of the first recognizer that matches at *anchor*."""
    for recognizer in RECOGNIZERS:
        # match() only tries the anchor itself; a shape further along is ignored
        match = recognizer.pattern.match(text, anchor)
        if match is None:
            continue
        outcome = recognizer.extract(match, locale, reference)
        if outcome is None:
            logger.debug("recognizer_rejected", recognizer=recognizer.name, anchor=anchor, matched=match.group(0))
            continue
        logger.debug("recognizer_matched", recognizer=recognizer.name, anchor=anchor, end=outcome.end)
        return replace(outcome, recognizer=recognizer.name)
    return None
