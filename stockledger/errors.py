"""Failure signals raised by the inventory store.

Every error carries the HTTP status the boundary layer answers with, so a
single exception handler in ``stockledger.main`` can translate them.
"""


class StoreError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StoreError):
    """A referenced entity id is unknown."""

    status_code = 404


class Conflict(StoreError):
    status_code = 409


class DuplicateKey(Conflict):
    """A unique business key (stock code, serial string) is already taken."""


class InvalidTransition(Conflict):
    """A status change not allowed by the transition table."""


class InvalidQuantity(StoreError):
    """Non-positive quantity, or one that would drive stock negative."""

    status_code = 400


class InvalidMovement(StoreError):
    status_code = 400


class ReferentialGap(StoreError):
    """A write points at a product, customer or sale that does not exist."""

    status_code = 422
