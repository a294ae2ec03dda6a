"""Tests for the date normalizer."""

from __future__ import annotations

import re

import pytest

from searchfw.adapters.elasticsearch.normalizer import DateNormalizer

CANONICAL = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


@pytest.fixture
def normalizer() -> DateNormalizer:
    return DateNormalizer()


# ── Timestamps ───────────────────────────────────────────────────────────────


class TestTimestamps:
    def test_integer_timestamp(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize(1700000000) == "2023-11-14T22:13:20Z"

    def test_digit_string_timestamp(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("1700000000") == "2023-11-14T22:13:20Z"

    def test_out_of_range_timestamp_passes_through(self, normalizer: DateNormalizer) -> None:
        huge = 10**20
        assert normalizer.normalize(huge) == huge


# ── Date strings ─────────────────────────────────────────────────────────────


class TestDateStrings:
    def test_iso_date(self, normalizer: DateNormalizer) -> None:
        result = normalizer.normalize("2023-11-14")
        assert CANONICAL.match(result)
        assert result == "2023-11-14T00:00:00Z"

    def test_natural_language_date(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("January 5, 2024") == "2024-01-05T00:00:00Z"

    def test_offset_converted_to_utc(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("2024-01-05T02:30:00+02:00") == "2024-01-05T00:30:00Z"

    def test_early_years_are_zero_padded(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("0500-01-01") == "0500-01-01T00:00:00Z"

    def test_unparseable_string_passes_through(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("not-a-date") == "not-a-date"


# ── Pass-through values ──────────────────────────────────────────────────────


class TestPassThrough:
    @pytest.mark.parametrize("value", [None, "", 0])
    def test_falsy_values_unchanged(self, normalizer: DateNormalizer, value: object) -> None:
        assert normalizer.normalize(value) is value

    def test_booleans_are_not_timestamps(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize(True) is True

    def test_non_string_values_unchanged(self, normalizer: DateNormalizer) -> None:
        value = ["2024-01-05"]
        assert normalizer.normalize(value) is value


# ── Format ───────────────────────────────────────────────────────────────────


class TestDateFormat:
    def test_default_format(self, normalizer: DateNormalizer) -> None:
        assert normalizer.date_format == "%Y-%m-%dT%H:%M:%SZ"

    def test_custom_format(self) -> None:
        assert DateNormalizer("%Y/%m/%d").normalize(1700000000) == "2023/11/14"
