"""
Release date validation.

Release dates are stored as text in ``DD.MM.YYYY`` form.  A date is
accepted when it parses under that exact format and is not later than
today.
"""

import re
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import FutureReleaseDate, InvalidDateFormat

RELEASE_DATE_FORMAT = "%d.%m.%Y"
_RELEASE_DATE_RE = re.compile(r"^[0-9]{2}\.[0-9]{2}\.[0-9]{4}$")


def parse_release_date(value: str) -> date:
    """Parse ``value`` as ``DD.MM.YYYY`` or raise ``InvalidDateFormat``."""
    # strptime alone would also accept "5.3.2024"
    if not _RELEASE_DATE_RE.match(value):
        raise InvalidDateFormat(value)
    try:
        return datetime.strptime(value, RELEASE_DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateFormat(value) from exc


def validate_release_date(value: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """Validate an optional release date.

    ``None`` and the empty string mean "no date supplied" and are
    accepted as is.  Otherwise the parsed date is returned, or
    ``InvalidDateFormat`` / ``FutureReleaseDate`` is raised.  Today is
    a valid release date; tomorrow is not.
    """
    if not value:
        return None
    parsed = parse_release_date(value)
    if today is None:
        today = date.today()
    if parsed > today:
        raise FutureReleaseDate(value)
    return parsed
