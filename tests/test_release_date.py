from datetime import date

import pytest

from music_library_api.app.core.exceptions import (
    FutureReleaseDate,
    InvalidDateFormat,
    InvalidParameter,
)
from music_library_api.app.services.release_date import parse_release_date, validate_release_date

TODAY = date(2024, 3, 5)


def test_parse_valid_date():
    assert parse_release_date("03.09.2009") == date(2009, 9, 3)


@pytest.mark.parametrize(
    "value",
    ["2009-09-03", "3.9.2009", "03.09.09", "31.02.2020", "32.01.2020", "03/09/2009", "03.09.2009 ", "abc"],
)
def test_malformed_dates_are_rejected(value):
    with pytest.raises(InvalidDateFormat):
        validate_release_date(value, today=TODAY)


def test_today_is_accepted():
    assert validate_release_date("05.03.2024", today=TODAY) == TODAY


def test_past_date_is_accepted():
    assert validate_release_date("29.02.2024", today=TODAY) == date(2024, 2, 29)


def test_tomorrow_is_rejected():
    with pytest.raises(FutureReleaseDate) as excinfo:
        validate_release_date("06.03.2024", today=TODAY)
    assert excinfo.value.message == "Release date cannot be in the future"


@pytest.mark.parametrize("value", [None, ""])
def test_missing_date_skips_validation(value):
    assert validate_release_date(value, today=TODAY) is None


def test_date_errors_are_invalid_parameters():
    assert issubclass(InvalidDateFormat, InvalidParameter)
    assert issubclass(FutureReleaseDate, InvalidParameter)
    assert InvalidDateFormat("x").status_code == 400


def test_non_ascii_digits_are_rejected():
    # Arabic-Indic digits for 03.09.2009
    with pytest.raises(InvalidDateFormat):
        validate_release_date("٠٣.٠٩.٢٠٠٩", today=TODAY)
