from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import TYPE_CHECKING

from payments_api.application.ports import LockProvider

if TYPE_CHECKING:
    from collections.abc import Iterator


class InMemoryLockProvider(LockProvider):
    """Per-payment locks for a single API process.

    A registry lock guards creation of the per-payment locks; it is held
    only while looking one up, so cancellations of different payments
    never wait on each other.

    Limitations:
    - Single-process only; several API workers need a database-level guard
    - Locks are never evicted
    """

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._registry_lock = Lock()

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        with self._registry_lock:
            lock = self._locks.setdefault(resource_id, Lock())

        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


class NoOpLockProvider(LockProvider):
    """Lock provider that performs no locking.

    For single-threaded unit tests only. Never use it where two requests
    may cancel the same payment.
    """

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:  # noqa: ARG002
        yield
