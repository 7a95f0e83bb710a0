"""
utils/errors.py
---------------
Exception hierarchy shared by every layer.

Store failures are not wrapped: they surface as the driver's own
``psycopg2.Error`` subclasses. Everything raised deliberately by this
package derives from ``DeliveryError`` so callers can tell the two apart.
"""


class DeliveryError(Exception):
    """Base class for all errors raised by the delivery core."""


class ConsistencyError(DeliveryError):
    """
    A reference fetched by one query could not be resolved against the
    result of another query. The store was mutated between the two reads.
    """

    def __init__(self, what: str, key):
        super().__init__(f"database was changed during data merging: {what} #{key} is missing")
        self.what = what
        self.key = key


class NotFoundError(DeliveryError):
    """A single record that must exist was not found."""


class DomainError(DeliveryError):
    """A business rule rejected the operation."""


class AccessDeniedError(DomainError):
    """The acting user's role or ownership does not permit the operation."""

    def __init__(self, reason: str = "access denied"):
        super().__init__(reason)


class InvalidStateError(DomainError):
    """The target record is not in a state that allows the operation."""


class EmptyCartError(InvalidStateError):
    def __init__(self):
        super().__init__("user cart is empty")


class InvalidFeedbackError(DomainError):
    """Feedback content is missing or out of range."""
