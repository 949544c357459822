"""
Application error taxonomy.

Each error maps to one HTTP status in ``airfiber_billing.main``:

- ValidationError -> 400 (caller input rejected before storage/transport)
- NotFoundError   -> 404 (referenced client id does not exist)
- StorageError    -> 500 (the database call failed)
- TransportError  -> 500 (the outbound email call failed)
"""


class BillingError(Exception):
    """Base class for every error raised by the billing services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BillingError):
    status_code = 400


class NotFoundError(BillingError):
    status_code = 404


class StorageError(BillingError):
    status_code = 500


class TransportError(BillingError):
    status_code = 500

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause
