"""Shared test fixtures."""
import pytest
import structlog
from datetime import date
from loose_dates.parser import DateParser
from loose_dates.models.parsing import ParsePosition
from tests.factories import make_locale_context

# Fixed so two-digit years resolve the same way whenever the suite runs
PIVOT_DAY = date(2024, 6, 15)


@pytest.fixture
def uk_parser():
    """Day-first, Monday-first parser built from CLDR data."""
    return DateParser("en_GB", today=PIVOT_DAY)


@pytest.fixture
def us_parser():
    """Month-first, Sunday-first parser built from CLDR data."""
    return DateParser("en_US", today=PIVOT_DAY)


@pytest.fixture
def locale_context():
    return make_locale_context()


@pytest.fixture
def position():
    return ParsePosition.extended(0)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
