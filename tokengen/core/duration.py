"""Duration parsing for key and token lifetimes."""

from collections.abc import Mapping
from datetime import timedelta

from pydantic import BaseModel, ConfigDict


class Duration(BaseModel):
    """A duration split into named units. Zero and negative values are legal."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    milliseconds: float = 0
    seconds: float = 0
    minutes: float = 0
    hours: float = 0
    days: float = 0

    def to_timedelta(self) -> timedelta:
        return timedelta(
            milliseconds=self.milliseconds,
            seconds=self.seconds,
            minutes=self.minutes,
            hours=self.hours,
            days=self.days,
        )


DurationLike = Duration | timedelta | Mapping[str, float] | int | float


def parse_duration(value: DurationLike) -> timedelta:
    """Convert a duration-like value to a timedelta.

    Plain numbers are seconds. Mappings are validated as ``Duration`` so an
    unknown unit raises ``pydantic.ValidationError``.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, Duration):
        return value.to_timedelta()
    if isinstance(value, Mapping):
        return Duration.model_validate(dict(value)).to_timedelta()
    if isinstance(value, bool):
        raise TypeError("duration must not be a bool")
    if isinstance(value, int | float):
        return timedelta(seconds=value)
    raise TypeError(f"unsupported duration type: {type(value).__name__}")
