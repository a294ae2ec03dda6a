"""Date normalization for Elasticsearch date fields."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class DateNormalizer:
    """Converts timestamps and date strings to a canonical UTC format.

    Integers and all-digit strings are read as Unix timestamps; any other
    string goes through a best-effort parse.  Values that cannot be read as
    a date are returned unchanged so that one bad value never aborts the
    indexing of an otherwise valid record.

    Args:
        date_format: ``strftime`` pattern of the output.
    """

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self.date_format = date_format

    def normalize(self, value: Any) -> Any:
        if not value or isinstance(value, bool):
            return value

        try:
            if isinstance(value, int):
                moment = datetime.fromtimestamp(value, UTC)
            elif isinstance(value, str) and value.isdigit():
                moment = datetime.fromtimestamp(int(value), UTC)
            elif isinstance(value, str):
                moment = self._parse(value)
            else:
                return value
        except (ValueError, OverflowError, OSError):
            logger.debug("Leaving unparseable date value as-is: %r", value)
            return value

        # %Y is not zero-padded below year 1000 on every platform.
        return moment.strftime(self.date_format.replace("%Y", f"{moment.year:04d}"))

    @staticmethod
    def _parse(value: str) -> datetime:
        moment = date_parser.parse(value)
        if moment.tzinfo is None:
            return moment.replace(tzinfo=UTC)
        return moment.astimezone(UTC)
