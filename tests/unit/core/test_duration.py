"""Tests for duration parsing."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from tokengen.core.duration import Duration, parse_duration


class TestDuration:
    """Tests for the unit-based duration model."""

    def test_sums_units(self) -> None:
        d = Duration(minutes=1, seconds=30, milliseconds=250)
        assert d.to_timedelta() == timedelta(seconds=90, milliseconds=250)

    def test_zero_by_default(self) -> None:
        assert Duration().to_timedelta() == timedelta(0)

    def test_negative_allowed(self) -> None:
        assert Duration(seconds=-5).to_timedelta() == timedelta(seconds=-5)


class TestParseDuration:
    """Tests for converting duration-like values."""

    def test_mapping(self) -> None:
        assert parse_duration({"milliseconds": 200}) == timedelta(milliseconds=200)

    def test_timedelta_passthrough(self) -> None:
        assert parse_duration(timedelta(hours=2)) == timedelta(hours=2)

    def test_number_is_seconds(self) -> None:
        assert parse_duration(30) == timedelta(seconds=30)
        assert parse_duration(1.5) == timedelta(milliseconds=1500)

    def test_duration_model(self) -> None:
        assert parse_duration(Duration(days=1)) == timedelta(days=1)

    def test_unknown_unit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_duration({"fortnights": 1})

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            parse_duration("30s")  # type: ignore[arg-type]

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError):
            parse_duration(True)
