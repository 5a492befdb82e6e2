"""Test the ordered recognizer table."""
import pytest
from datetime import datetime
from loose_dates.models.parsing import FieldMask
from loose_dates.recognizers.table import RECOGNIZERS, try_recognizers
from tests.factories import make_locale_context, make_reference


def recognize(text, anchor=0, context=None, reference=None):
    return try_recognizers(text, anchor, context or make_locale_context(), reference or make_reference())


class TestTableOrder:
    def test_priority_order(self):
        assert [r.name for r in RECOGNIZERS] == [
            "day_month_year",
            "day_month",
            "month_day_year",
            "month_day",
            "numeric_dmy",
            "iso_ymd",
            "day_monthname_year",
            "last_weekday",
            "next_weekday",
            "month_year",
            "units_ago",
            "year_monthname_day",
            "monthname_day_year",
            "bare_word",
        ]

    def test_higher_priority_wins(self):
        # day_month also matches "31 August" here
        outcome = recognize("31 August 1979")
        assert outcome.recognizer == "day_month_year"
        assert outcome.end == 14
        assert outcome.inferred == FieldMask.NONE

    def test_falls_through_on_bad_month(self):
        # day_month matches "3 months" but "months" is no month name
        outcome = recognize("3 months ago")
        assert outcome.recognizer == "units_ago"


class TestWrittenMonths:
    @pytest.mark.parametrize("text,end", [
        ("31st of August 1979", 19),
        ("31 Aug 79", 9),
        ("31. August 1979", 15),
        ("Friday, 31 August 1979", 22),
        ("Friday the 31st of August 1979", 30),
    ])
    def test_day_month_year(self, text, end):
        outcome = recognize(text)
        assert outcome.value == datetime(1979, 8, 31)
        assert outcome.end == end
        assert outcome.accurate == FieldMask.ALL

    def test_day_month(self):
        outcome = recognize("31st August")
        assert outcome.value == datetime(2001, 8, 31)
        assert outcome.inferred == FieldMask.YEAR
        assert outcome.accurate == FieldMask.ALL

    @pytest.mark.parametrize("text", ["August 31st 1979", "Aug 31, 1979", "Friday, August 31st, 1979"])
    def test_month_day_year(self, text):
        outcome = recognize(text)
        assert outcome.recognizer == "month_day_year"
        assert outcome.value == datetime(1979, 8, 31)
        assert outcome.end == len(text)

    def test_month_day(self):
        outcome = recognize("August 31st")
        assert outcome.recognizer == "month_day"
        assert outcome.value == datetime(2001, 8, 31)
        assert outcome.inferred == FieldMask.YEAR

    def test_unknown_leading_weekday_abandons(self):
        assert recognize("Blue 31 August 1979") is None

    def test_weekday_does_not_change_date(self):
        # 31 August 1979 was a Friday
        outcome = recognize("Monday 31 August 1979")
        assert outcome.value == datetime(1979, 8, 31)


class TestNumeric:
    def test_day_first(self):
        outcome = recognize("31/8/79")
        assert outcome.value == datetime(1979, 8, 31)
        assert outcome.end == 7

    def test_month_first(self):
        outcome = recognize("08/31/1979", context=make_locale_context(day_before_month=False))
        assert outcome.value == datetime(1979, 8, 31)
        assert outcome.end == 10

    @pytest.mark.parametrize("text", ["31-8-79", "31.08.79", "31/08/1979"])
    def test_separators(self, text):
        assert recognize(text).value == datetime(1979, 8, 31)

    def test_invalid_month_and_day(self):
        assert recognize("27-34-55") is None

    def test_iso(self):
        outcome = recognize("2013-02-25 12:03:35.6")
        assert outcome.recognizer == "iso_ymd"
        assert outcome.value == datetime(2013, 2, 25)
        assert outcome.end == 10

    def test_day_monthname_year(self):
        outcome = recognize("31-Aug-1979")
        assert outcome.recognizer == "day_monthname_year"
        assert outcome.value == datetime(1979, 8, 31)

    def test_rolls_over_short_month(self):
        assert recognize("30/2/2001").value == datetime(2001, 3, 2)


class TestRelativeWeekdays:
    def test_last_weekday(self):
        outcome = recognize("last Tuesday")
        assert outcome.value == datetime(2001, 2, 27)
        assert outcome.inferred == FieldMask.ALL
        assert outcome.accurate == FieldMask.NONE

    def test_next_weekday(self):
        outcome = recognize("next Wednesday")
        assert outcome.value == datetime(2001, 3, 14)
        assert outcome.end == 14

    def test_last_unknown_word(self):
        assert recognize("last orders") is None


class TestMonthYear:
    def test_month_year(self):
        outcome = recognize("July 2009")
        assert outcome.value == datetime(2009, 7, 1)
        assert outcome.inferred == FieldMask.DAY
        assert outcome.accurate == FieldMask.YEAR | FieldMask.MONTH

    def test_apostrophe_year(self):
        assert recognize("August '08").value == datetime(2008, 8, 1)


class TestUnitsAgo:
    @pytest.mark.parametrize("text,expected,accurate", [
        ("5 days ago", datetime(2001, 3, 2), FieldMask.ALL),
        ("1 day ago", datetime(2001, 3, 6), FieldMask.ALL),
        ("2 weeks ago", datetime(2001, 2, 19), FieldMask.YEAR | FieldMask.MONTH),
        ("3 months ago", datetime(2000, 12, 1), FieldMask.YEAR | FieldMask.MONTH),
        ("2 years ago", datetime(1999, 1, 1), FieldMask.YEAR),
    ])
    def test_units(self, text, expected, accurate):
        outcome = recognize(text)
        assert outcome.value == expected
        assert outcome.inferred == FieldMask.ALL
        assert outcome.accurate == accurate
        assert outcome.end == len(text)

    def test_unknown_unit(self):
        assert recognize("3 fortnights ago") is None


class TestBigAndMiddleEndian:
    def test_compact(self):
        outcome = recognize("2003Nov9")
        assert outcome.recognizer == "year_monthname_day"
        assert outcome.value == datetime(2003, 11, 9)
        assert outcome.end == 8

    def test_trailing_weekday_consumed(self):
        outcome = recognize("2003-Nov-9, Sunday")
        assert outcome.value == datetime(2003, 11, 9)
        assert outcome.end == 18

    def test_trailing_other_word_left(self):
        outcome = recognize("2003-Nov-9, and then")
        assert outcome.value == datetime(2003, 11, 9)
        assert outcome.end == 10

    def test_monthname_day_year(self):
        outcome = recognize("Nov/9/2003")
        assert outcome.recognizer == "monthname_day_year"
        assert outcome.value == datetime(2003, 11, 9)
        assert outcome.end == 10


class TestBareWord:
    def test_weekday(self):
        outcome = recognize("Sunday")
        assert outcome.value == datetime(2001, 3, 11)
        assert outcome.inferred == FieldMask.ALL
        assert outcome.accurate == FieldMask.NONE

    def test_weekday_sunday_first(self):
        context = make_locale_context(day_before_month=False, first_week_day=6)
        assert recognize("Sunday", context=context).value == datetime(2001, 3, 4)

    def test_month(self):
        outcome = recognize("August")
        assert outcome.value == datetime(2001, 8, 1)
        assert outcome.inferred == FieldMask.DAY | FieldMask.YEAR
        assert outcome.accurate == FieldMask.MONTH
        assert outcome.end == 6

    def test_lowercase_month_ignored(self):
        assert recognize("may") is None

    def test_capitalised_may(self):
        assert recognize("May").value == datetime(2001, 5, 1)

    def test_ordinary_word(self):
        assert recognize("meeting") is None


class TestAnchoring:
    def test_later_date_not_found(self):
        assert recognize("on 31/8/79") is None

    def test_date_at_anchor(self):
        outcome = recognize("on 31/8/79", anchor=3)
        assert outcome.value == datetime(1979, 8, 31)
        assert outcome.end == 10

    def test_anchor_inside_date(self):
        # "1/8/79" is itself a valid date shape
        outcome = recognize("31/8/79", anchor=1)
        assert outcome.value == datetime(1979, 8, 1)

    def test_keeps_time_of_day(self):
        outcome = recognize("31/8/79", reference=make_reference(hour=14, minute=30))
        assert outcome.value == datetime(1979, 8, 31, 14, 30)
