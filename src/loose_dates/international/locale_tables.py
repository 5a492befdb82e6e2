"""Build locale contexts from the CLDR data shipped with Babel."""
from __future__ import annotations
from datetime import date
import structlog
from babel import Locale, UnknownLocaleError
from babel.dates import format_date
from ..models.locale import LocaleContext, LocaleTag, YearPivot

logger = structlog.get_logger(__name__)

# Formatted with each locale's short pattern to find its day/month order
ORDER_SAMPLE_DATE = date(2000, 3, 4)


def resolve_locale_tag(name: str | None) -> LocaleTag | None:
    """Parse ``language[_REGION[_variant]]``.

    The tag is only accepted when writing it back out reproduces *name*
    exactly, so ``en_gb`` or ``en_GB_`` are rejected while ``en_GB`` is not.
    """
    if name is None or not name.strip():
        return None

    parts = name.split("_")
    # trailing empty parts are dropped before counting
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    if len(parts) > 3:
        return None

    language = parts[0].lower()
    region = parts[1].upper() if len(parts) > 1 else ""
    variant = parts[2] if len(parts) > 2 else ""
    tag = LocaleTag(language=language, region=region, variant=variant)

    return tag if str(tag) == name else None


def derive_day_before_month(short_date: str) -> bool:
    """True when the day is written before the month.

    *short_date* is 2000-03-04 rendered in the locale's short format; the
    locale is month-first only when the "3" comes before the "4".
    """
    return not short_date.find("3") < short_date.find("4")


def _babel_locale(tag: LocaleTag) -> Locale:
    identifier = str(tag)
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError) as exc:
        raise ValueError(f"Unknown locale: {identifier}") from exc


def build_locale_context(
    locale: str | LocaleTag,
    year: int,
    day_before_month: bool | None = None,
) -> LocaleContext:
    """Read name tables and ordering conventions for *locale*.

    *year* is the current year, used as the two-digit-year pivot.
    *day_before_month* overrides the order derived from the short date format.
    """
    tag = locale if isinstance(locale, LocaleTag) else resolve_locale_tag(locale)
    if tag is None:
        raise ValueError(f"Malformed locale name: {locale!r}")

    cldr = _babel_locale(tag)
    months = cldr.months["format"]
    days = cldr.days["format"]

    if day_before_month is None:
        short_date = format_date(ORDER_SAMPLE_DATE, format="short", locale=cldr)
        day_before_month = derive_day_before_month(short_date)

    context = LocaleContext(
        month_names=tuple(months["wide"][m] for m in range(1, 13)),
        short_month_names=tuple(months["abbreviated"][m] for m in range(1, 13)),
        weekday_names=tuple(days["wide"][d] for d in range(7)),
        short_weekday_names=tuple(days["abbreviated"][d] for d in range(7)),
        era_names=tuple(name for _, name in sorted(
            (key, name) for key, name in cldr.eras["abbreviated"].items() if isinstance(key, int)
        )),
        day_before_month=day_before_month,
        first_week_day=cldr.first_week_day,
        year_pivot=YearPivot.for_year(year),
        tag=tag,
    )
    logger.info(
        "locale_context_built",
        locale=str(tag),
        day_before_month=context.day_before_month,
        first_week_day=context.first_week_day,
    )
    return context
