"""Errors raised by the crud layer and translated to HTTP responses by the routers."""


class InventoryServiceError(Exception):
    """Base class for expected, client-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryServiceError):
    """Required input is missing or malformed (e.g. no file uploaded)."""


class NotFoundError(InventoryServiceError):
    """A referenced inventory, kandang or user does not exist."""


class ConflictError(InventoryServiceError):
    """The record was changed by another request between read and write."""
