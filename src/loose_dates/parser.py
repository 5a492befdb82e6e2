"""Anchored natural-language date parser.

Turns fragments such as "31st of August 1979", "next Wednesday" or
"3 months ago" into full dates, filling the fields the text leaves out from
a reference date.

Parsing is anchored: a date is only found when it starts exactly at
``position.index``. Callers scanning a document move the position
themselves, optionally using ``collect_anchor_words`` to pick candidate
offsets.
"""

from __future__ import annotations

from datetime import date, datetime, time

import structlog

from loose_dates.config import Settings
from loose_dates.international.locale_tables import build_locale_context
from loose_dates.models.locale import LocaleContext, LocaleTag, YearPivot
from loose_dates.models.parsing import ParseOutcome, ParsePosition
from loose_dates.recognizers.relative import RELATIVE_WORDS, match_relative_keyword
from loose_dates.recognizers.table import try_recognizers

logger = structlog.get_logger(__name__)


def _as_datetime(reference: date | None) -> datetime:
    if reference is None:
        return datetime.now()
    if isinstance(reference, datetime):
        return reference
    return datetime.combine(reference, time.min)


class DateParser:
    """Locale-aware parser for loosely formatted dates.

    The locale context is built once here and only read afterwards, so one
    instance can be shared between threads; all per-call state lives in the
    caller's ``ParsePosition``.

    Args:
        locale: Locale name such as ``"en_GB"``, a ``LocaleTag``, a pre-built
            ``LocaleContext``, or ``None`` for ``Settings.default_locale``.
        today: Date used for the two-digit-year pivot. Defaults to today, or
            to the pivot already held by a pre-built ``LocaleContext``.
        day_before_month: Overrides the day/month order derived from the
            locale's short date format.
        settings: Settings to read defaults from.
    """

    def __init__(
        self,
        locale: str | LocaleTag | LocaleContext | None = None,
        *,
        today: date | None = None,
        day_before_month: bool | None = None,
        settings: Settings | None = None,
    ):
        if isinstance(locale, LocaleContext):
            update = {}
            if day_before_month is not None:
                update["day_before_month"] = day_before_month
            if today is not None:
                update["year_pivot"] = YearPivot.for_year(today.year)
            self._locale = locale.model_copy(update=update) if update else locale
        else:
            settings = settings or Settings()
            year = (today or date.today()).year
            self._locale = build_locale_context(locale or settings.default_locale, year, day_before_month)

    @property
    def locale(self) -> LocaleContext:
        return self._locale

    def parse(self, text: str, position: ParsePosition, reference: date | None = None) -> datetime | None:
        """Parse the date starting at ``position.index``.

        Returns ``None`` when no date starts there, leaving the position as it
        was. On success the position moves past the consumed text and, if it
        collects features, gains ``relative``, ``inferred`` and ``accurate``.
        """
        outcome = self.parse_outcome(text, position, reference)
        return None if outcome is None else outcome.value

    def parse_outcome(
        self, text: str, position: ParsePosition, reference: date | None = None
    ) -> ParseOutcome | None:
        """Like ``parse`` but returns the full outcome with masks and end offset."""
        reference = _as_datetime(reference)
        anchor = position.index
        # pattern.match would treat a negative start as offset 0
        if not 0 <= anchor <= len(text):
            return None

        outcome = match_relative_keyword(text, anchor, self._locale, reference)
        if outcome is None:
            outcome = try_recognizers(text, anchor, self._locale, reference)
        if outcome is None:
            return None

        position.index = outcome.end
        if position.wants_features:
            position.record("inferred", outcome.inferred)
            position.record("accurate", outcome.accurate)
            position.record("relative", outcome.relative_to(reference))
        return outcome

    def resolve_year(self, year: int) -> int:
        """Expand a two-digit year using this parser's pivot."""
        return self._locale.resolve_year(year)

    def collect_anchor_words(self) -> set[str]:
        """Words that can begin or appear in a date.

        Month and weekday names (full and short) plus relative words such as
        "last" and "tomorrow". Only a hint for picking offsets to try.
        """
        return self._locale.names() | RELATIVE_WORDS
