"""Error types shared across the store and service layers."""
from __future__ import annotations


class StoreError(Exception):
    """Raised when the record store rejects or fails an operation."""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
