"""payments-api: payment instructions with same-day cancellation fees."""

__version__ = "0.1.0"
