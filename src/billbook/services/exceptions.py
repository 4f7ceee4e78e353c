from __future__ import annotations


class BillingError(Exception):
    """Base class for errors raised by the ledger core."""


class NotFoundError(BillingError):
    """A customer, item or invoice lookup did not resolve."""

    kind = "Record"

    def __init__(self, key: object) -> None:
        super().__init__(f"{self.kind} not found: {key}")
        self.key = key


class CustomerNotFound(NotFoundError):
    kind = "Customer"


class ItemNotFound(NotFoundError):
    kind = "Item"


class InvoiceNotFound(NotFoundError):
    kind = "Invoice"


class StorageError(BillingError):
    """A write to the record store failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
