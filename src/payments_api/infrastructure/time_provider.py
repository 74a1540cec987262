from datetime import UTC, datetime, timedelta

from payments_api.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Wall clock, in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Clock that only moves when told to.

    Lets tests place creation and cancellation on either side of an hour
    or midnight boundary. Not safe to move from several threads.
    """

    def __init__(self, fixed_time: datetime) -> None:
        self._current = _require_utc(fixed_time)

    def now(self) -> datetime:
        return self._current

    def set_time(self, new_time: datetime) -> None:
        self._current = _require_utc(new_time)

    def advance(self, delta: timedelta) -> None:
        """Shift the clock by ``delta``; negative values move it back."""
        self._current += delta


def _require_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={moment.tzinfo}")
    return moment
