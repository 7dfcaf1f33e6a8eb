from __future__ import annotations


class CatalogError(Exception):
    pass


class InvalidRecord(CatalogError):
    """A required field or range rule was violated on create/update/import."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid book record")


class StoreUnavailable(CatalogError):
    """The backing store could not complete a read or write. Safe to retry."""


class ProviderUnavailable(CatalogError):
    """The external catalog failed (network, timeout or malformed payload)."""
