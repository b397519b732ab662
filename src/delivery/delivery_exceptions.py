"""Exception classes for notification delivery."""

from typing import List


class DeliveryFailure(Exception):
    """Exception raised when every delivery mechanism for a channel has failed."""

    def __init__(self, message: str, errors: List[str] | None = None):
        """
        Initialize delivery failure.

        Args:
            message: Error message naming each failed mechanism
            errors: The underlying failure reasons, in the order they were tried
        """
        super().__init__(message)
        self.errors = errors or []
