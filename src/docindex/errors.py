"""Errors raised while reading a search index."""

from __future__ import annotations


class MalformedIndexError(ValueError):
    """The serialized index does not match the record schema."""

    def __init__(self, message: str, *, position: int | None = None, field: str | None = None) -> None:
        self.position = position
        self.field = field
        if position is not None:
            where = f"record {position}"
            if field is not None:
                where += f", field '{field}'"
            message = f"{where}: {message}"
        super().__init__(message)
