"""Custom exceptions for the ScanPlate cart engine."""
from __future__ import annotations


class ScanPlateException(Exception):
    """Base exception for all ScanPlate errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationException(ScanPlateException):
    """Configuration errors."""

    pass


class ValidationException(ScanPlateException):
    """Checkout input rejected before anything is sent to the server."""

    pass


class EmptyCart(ValidationException):
    """Order cannot be assembled from an empty cart."""

    def __init__(self) -> None:
        super().__init__("Your cart is empty.")


class MissingRestaurantContext(ValidationException):
    """No restaurant identifier is known for this session."""

    def __init__(self) -> None:
        super().__init__("Restaurant is not specified; scan the QR code again.")


class MissingContactInfo(ValidationException):
    """Pickup orders need a customer name and phone number."""

    def __init__(self, field: str) -> None:
        super().__init__("Please enter your Name and Phone Number.")
        self.field = field


class InvalidPhone(ValidationException):
    """Phone number does not look like a phone number."""

    def __init__(self, phone: str) -> None:
        super().__init__("Please enter a valid Phone Number.")
        self.phone = phone


class InvalidEmail(ValidationException):
    """Email address does not match local@domain.tld."""

    def __init__(self, email: str) -> None:
        super().__init__("Please enter a valid Email address or leave it empty.")
        self.email = email


class InvalidTableNumber(ValidationException):
    """Table number is not a non-negative integer."""

    def __init__(self, table_number: object) -> None:
        super().__init__("Table number must be a valid non-negative integer.")
        self.table_number = table_number


class PersistenceCorrupt(ScanPlateException):
    """Stored cart could not be decoded; the cart starts empty instead."""

    pass


class SubmissionFailed(ScanPlateException):
    """Order endpoint rejected the order or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
