"""Delivery attempt result."""

from dataclasses import dataclass


@dataclass
class DeliveryResult:
    """Outcome of a single delivery attempt."""
    succeeded: bool
    message: str

    @classmethod
    def success(cls, message: str) -> "DeliveryResult":
        """Build a successful result."""
        return cls(succeeded=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "DeliveryResult":
        """Build a failed result."""
        return cls(succeeded=False, message=message)
