from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class TimeProvider(ABC):
    """Source of the current instant for creation and cancellation.

    Implementations return aware datetimes in UTC (tzinfo=datetime.UTC).
    The calendar day used by the same-day rule comes from converting this
    instant into the business time zone, see domain.services.cancellation.
    """

    @abstractmethod
    def now(self) -> datetime: ...
