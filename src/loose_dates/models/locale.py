"""Locale data the recognizers read from.

A ``LocaleContext`` is built once per parser and never changes afterwards.
Name tables are plain ordered tuples: the position of a month name is the
zero-based month, the position of a weekday name is ``isoweekday() - 1``.
"""

from __future__ import annotations

import unicodedata

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _fold(word: str) -> str:
    return unicodedata.normalize("NFC", word).casefold()


def _normalise_names(names: tuple[str, ...]) -> tuple[str, ...]:
    # "janv." and "janv" must both look up the same entry
    return tuple(_fold(name.strip()).rstrip(".") for name in names)


def _find(table: tuple[str, ...], word: str) -> int | None:
    try:
        return table.index(word)
    except ValueError:
        return None


class LocaleTag(BaseModel):
    """A ``language[_REGION[_variant]]`` identifier."""

    model_config = ConfigDict(frozen=True)

    language: str
    region: str = ""
    variant: str = ""

    def __str__(self) -> str:
        tag = self.language
        if self.region or self.variant:
            tag += f"_{self.region}"
        if self.variant:
            tag += f"_{self.variant}"
        return tag


class YearPivot(BaseModel):
    """Century window for two-digit years, fixed when the parser is built."""

    model_config = ConfigDict(frozen=True)

    two_digit_year: int = Field(ge=0, le=99)
    century_base: int

    @classmethod
    def for_year(cls, year: int) -> YearPivot:
        return cls(two_digit_year=year % 100, century_base=year - year % 100)

    def resolve(self, year: int) -> int:
        """Expand a two-digit year; years of three or more digits pass through.

        Two-digit years after the pivot fall in the previous century, the rest
        in the current one: with a pivot of 2024, 79 -> 1979 and 05 -> 2005.
        """
        if year >= 100:
            return year
        if year > self.two_digit_year:
            return self.century_base - 100 + year
        return self.century_base + year


class LocaleContext(BaseModel):
    """Month/weekday/era names plus the ordering conventions of one locale."""

    model_config = ConfigDict(frozen=True)

    month_names: tuple[str, ...] = Field(min_length=12, max_length=12)
    short_month_names: tuple[str, ...] = Field(min_length=12, max_length=12)
    weekday_names: tuple[str, ...] = Field(min_length=7, max_length=7)
    short_weekday_names: tuple[str, ...] = Field(min_length=7, max_length=7)
    era_names: tuple[str, ...] = ()
    day_before_month: bool
    first_week_day: int = Field(default=0, ge=0, le=6)
    year_pivot: YearPivot
    tag: LocaleTag | None = None

    @field_validator(
        "month_names", "short_month_names", "weekday_names", "short_weekday_names", "era_names"
    )
    @classmethod
    def _casefold(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _normalise_names(value)

    def lookup_month(self, word: str) -> int | None:
        """Zero-based month for a full or short month name."""
        key = _fold(word)
        index = _find(self.month_names, key)
        if index is None:
            index = _find(self.short_month_names, key)
        return index

    def lookup_weekday(self, word: str) -> int | None:
        """ISO weekday (Monday=1 .. Sunday=7) for a full or short weekday name."""
        key = _fold(word)
        index = _find(self.weekday_names, key)
        if index is None:
            index = _find(self.short_weekday_names, key)
        return None if index is None else index + 1

    def resolve_year(self, year: int) -> int:
        return self.year_pivot.resolve(year)

    def names(self) -> set[str]:
        """Every month and weekday name, full and short."""
        return {
            *self.month_names,
            *self.short_month_names,
            *self.weekday_names,
            *self.short_weekday_names,
        } - {""}
