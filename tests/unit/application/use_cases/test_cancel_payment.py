"""Tests for CancelPaymentUseCase.

Tests cover:
- Cancellation success flow and persistence
- Rejections leave the stored payment untouched
- Indeterminate payment type is reported and logged
- Business time zone is honoured
- Concurrency with locking (only one cancellation succeeds)
- Time fetched inside lock
"""

import threading
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor, wait
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from structlog.testing import capture_logs

from payments_api.application.ports import LockProvider
from payments_api.application.use_cases import CancelPaymentUseCase
from payments_api.domain.entities import Payment, PaymentStatus
from payments_api.domain.exceptions import (
    CancellationNotAllowedError,
    PaymentNotFoundError,
    PaymentTypeIndeterminateError,
)
from payments_api.domain.value_objects import PaymentId
from payments_api.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from payments_api.infrastructure.payment_repository import InMemoryPaymentRepository
from payments_api.infrastructure.time_provider import FixedTimeProvider

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def created_at() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(created_at: datetime) -> FixedTimeProvider:
    return FixedTimeProvider(created_at + timedelta(hours=3, minutes=1))


@pytest.fixture
def payment_repository() -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository()


@pytest.fixture
def use_case(
    time_provider: FixedTimeProvider,
    payment_repository: InMemoryPaymentRepository,
) -> CancelPaymentUseCase:
    return CancelPaymentUseCase(
        lock_provider=NoOpLockProvider(),
        time_provider=time_provider,
        payment_repository=payment_repository,
    )


@pytest.fixture
def stored_payment(
    make_payment: Callable[..., Payment],
    payment_repository: InMemoryPaymentRepository,
    created_at: datetime,
) -> Callable[..., Payment]:
    """Create a payment created at ``created_at`` and save it."""

    def factory(**overrides: object) -> Payment:
        overrides.setdefault("creation_date", created_at)
        payment = make_payment(**overrides)
        payment_repository.save(payment)
        return payment

    return factory


# =============================================================================
# Success Flow
# =============================================================================


class TestCancelPaymentSuccess:
    @pytest.mark.parametrize(
        ("payment_type", "expected_fee"),
        [(1, Decimal("0.15")), (2, Decimal("0.30")), (3, Decimal("0.45"))],
    )
    def test_returns_cancelled_payment(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        payment_type: int,
        expected_fee: Decimal,
    ) -> None:
        payment = stored_payment(type=payment_type)

        result = use_case.execute(payment.id)

        assert result.id == payment.id
        assert result.cancellation == expected_fee
        assert result.status == PaymentStatus.CANCELLED

    def test_cancelled_payment_is_persisted(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
    ) -> None:
        payment = stored_payment(type=1)

        use_case.execute(payment.id)

        stored = payment_repository.get(payment.id)
        assert stored is not None
        assert stored.cancellation == Decimal("0.15")
        assert payment_repository.list_by_status(PaymentStatus.ACTIVE) == []

    def test_logs_cancellation(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
    ) -> None:
        payment = stored_payment(type=2)

        with capture_logs() as logs:
            use_case.execute(payment.id)

        event = next(e for e in logs if e["event"] == "payment_cancelled")
        assert event["payment_id"] == str(payment.id)
        assert event["fee"] == "0.30"

    def test_time_is_read_at_execution(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        time_provider: FixedTimeProvider,
    ) -> None:
        payment = stored_payment(type=1)
        time_provider.advance(timedelta(hours=2))

        result = use_case.execute(payment.id)

        assert result.cancellation == Decimal("0.25")

    def test_clock_behind_creation_is_free_and_warned(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        time_provider: FixedTimeProvider,
        created_at: datetime,
    ) -> None:
        payment = stored_payment(type=3)
        time_provider.set_time(created_at - timedelta(minutes=90))

        with capture_logs() as logs:
            result = use_case.execute(payment.id)

        assert result.cancellation == Decimal("0")
        warning = next(e for e in logs if e["event"] == "cancellation_before_creation")
        assert warning["log_level"] == "warning"
        assert "payment_cancelled" in [e["event"] for e in logs]


# =============================================================================
# Rejections
# =============================================================================


class TestCancelPaymentRejections:
    def test_unknown_payment_raises_not_found(self, use_case: CancelPaymentUseCase) -> None:
        with pytest.raises(PaymentNotFoundError, match="Payment not found"):
            use_case.execute(PaymentId.generate())

    def test_next_day_is_rejected_and_payment_stays_active(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
        time_provider: FixedTimeProvider,
    ) -> None:
        payment = stored_payment(type=1)
        time_provider.advance(timedelta(days=1))

        with pytest.raises(CancellationNotAllowedError, match="same day"):
            use_case.execute(payment.id)

        assert payment_repository.get(payment.id) == payment

    def test_second_cancellation_is_rejected_and_fee_kept(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
        time_provider: FixedTimeProvider,
    ) -> None:
        payment = stored_payment(type=1)
        use_case.execute(payment.id)
        time_provider.advance(timedelta(hours=1))

        for _ in range(2):
            with pytest.raises(CancellationNotAllowedError, match="already been cancelled"):
                use_case.execute(payment.id)

        stored = payment_repository.get(payment.id)
        assert stored is not None
        assert stored.cancellation == Decimal("0.15")

    def test_rejection_is_logged(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
    ) -> None:
        payment = stored_payment(cancellation=Decimal("0"))

        with capture_logs() as logs, pytest.raises(CancellationNotAllowedError):
            use_case.execute(payment.id)

        assert [e["event"] for e in logs] == ["payment_cancellation_rejected"]
        assert logs[0]["log_level"] == "info"

    def test_indeterminate_type_is_raised_and_logged(
        self,
        use_case: CancelPaymentUseCase,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
    ) -> None:
        payment = stored_payment(type=5, bic_code="COBADEFFXXX")

        with capture_logs() as logs, pytest.raises(PaymentTypeIndeterminateError):
            use_case.execute(payment.id)

        event = next(e for e in logs if e["event"] == "payment_type_indeterminate")
        assert event["log_level"] == "error"
        assert event["payment_type"] == 5
        assert event["bic_present"] is True
        assert event["details_present"] is False
        assert payment_repository.get(payment.id) == payment


class TestCancelPaymentBusinessTimezone:
    def test_day_boundary_follows_business_timezone(
        self,
        make_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
    ) -> None:
        payment = make_payment(creation_date=datetime(2024, 1, 1, 22, 30, tzinfo=UTC))
        payment_repository.save(payment)
        use_case = CancelPaymentUseCase(
            lock_provider=NoOpLockProvider(),
            time_provider=FixedTimeProvider(datetime(2024, 1, 1, 23, 30, tzinfo=UTC)),
            payment_repository=payment_repository,
            business_timezone=ZoneInfo("Europe/Madrid"),
        )

        with pytest.raises(CancellationNotAllowedError):
            use_case.execute(payment.id)


# =============================================================================
# Locking
# =============================================================================


class RecordingLockProvider(LockProvider):
    """Records which resources were locked and whether a lock is held."""

    def __init__(self) -> None:
        self.acquired: list[str] = []
        self.held = False

    @contextmanager
    def acquire(self, resource_id: str) -> Iterator[None]:
        self.acquired.append(resource_id)
        self.held = True
        try:
            yield
        finally:
            self.held = False


class ClockSpy(FixedTimeProvider):
    def __init__(self, fixed_time: datetime) -> None:
        super().__init__(fixed_time)
        self.lock: RecordingLockProvider | None = None
        self.reads_inside_lock: list[bool] = []

    def now(self) -> datetime:
        self.reads_inside_lock.append(self.lock is not None and self.lock.held)
        return super().now()


class TestCancelPaymentLocking:
    def test_time_is_fetched_inside_lock(
        self,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
        created_at: datetime,
    ) -> None:
        payment = stored_payment()
        clock = ClockSpy(created_at + timedelta(hours=1))
        lock = RecordingLockProvider()
        clock.lock = lock
        use_case = CancelPaymentUseCase(
            lock_provider=lock,
            time_provider=clock,
            payment_repository=payment_repository,
        )

        use_case.execute(payment.id)

        assert lock.acquired == [str(payment.id.value)]
        assert clock.reads_inside_lock == [True]

    def test_lock_is_released_after_rejection(
        self,
        stored_payment: Callable[..., Payment],
        payment_repository: InMemoryPaymentRepository,
        time_provider: FixedTimeProvider,
        lock_provider: InMemoryLockProvider,
    ) -> None:
        payment = stored_payment(type=7)
        use_case = CancelPaymentUseCase(
            lock_provider=lock_provider,
            time_provider=time_provider,
            payment_repository=payment_repository,
        )

        with pytest.raises(PaymentTypeIndeterminateError):
            use_case.execute(payment.id)

        acquired = threading.Event()

        def worker() -> None:
            with lock_provider.acquire(str(payment.id.value)):
                acquired.set()

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(timeout=5.0)

        assert acquired.is_set()


class TestCancelPaymentConcurrency:
    def test_concurrent_cancellations_only_one_succeeds(
        self,
        make_payment: Callable[..., Payment],
        created_at: datetime,
    ) -> None:
        """Five threads cancel the same payment; one succeeds, four are rejected."""
        payment_repository = InMemoryPaymentRepository()
        use_case = CancelPaymentUseCase(
            lock_provider=InMemoryLockProvider(),
            time_provider=FixedTimeProvider(created_at + timedelta(hours=2)),
            payment_repository=payment_repository,
        )
        payment = make_payment(type=2, creation_date=created_at)
        payment_repository.save(payment)

        results: list[str] = []
        results_lock = threading.Lock()

        def worker() -> None:
            try:
                use_case.execute(payment.id)
                outcome = "success"
            except CancellationNotAllowedError:
                outcome = "not_allowed"
            with results_lock:
                results.append(outcome)

        with ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(worker) for _ in range(5)]
            wait(futures)

        assert sorted(results) == ["not_allowed"] * 4 + ["success"]

        stored = payment_repository.get(payment.id)
        assert stored is not None
        assert stored.cancellation == Decimal("0.20")
