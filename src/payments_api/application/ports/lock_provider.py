from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class LockProvider(ABC):
    """Mutual exclusion keyed by payment id.

    While one caller is inside ``acquire(key)``, any other caller asking
    for the same key waits. Distinct keys never wait on each other. The
    lock is given back when the block exits, whether or not it raised.

    Two concurrent cancellations of one payment therefore run one after
    the other, and the second sees the payment already cancelled.
    """

    @abstractmethod
    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        """Hold the lock for ``resource_id`` (``str(payment_id.value)``)."""
        ...
