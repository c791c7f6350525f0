"""Cursor encoding and decoding for pagination.

A cursor is the URL-safe base64 encoding of the last document id on a page.
It is opaque to clients but not tamper-proof, and is only meaningful for the
collection, filter and sort order that produced it.

Example:
    >>> CursorCodec.encode("habit-42")
    'aGFiaXQtNDI='
    >>> CursorCodec.decode("aGFiaXQtNDI=")
    'habit-42'
"""

from __future__ import annotations

import base64
import binascii


class MalformedCursor(ValueError):
    """Raised when a cursor cannot be decoded into a document id."""

    def __init__(self, cursor: str, reason: str) -> None:
        self.cursor = cursor
        self.reason = reason
        super().__init__(f"Invalid cursor: {reason}")


class CursorCodec:
    """Encode and decode pagination cursors over document ids.

    Usage:
        cursor = CursorCodec.encode(document.id)
        document_id = CursorCodec.decode(cursor)
    """

    @staticmethod
    def encode(document_id: str) -> str:
        """Encode a document id into an opaque cursor.

        Raises:
            ValueError: If the id is empty or contains a path separator.
        """
        if not document_id or "/" in document_id:
            msg = f"Cannot encode a cursor for document id {document_id!r}"
            raise ValueError(msg)
        return base64.urlsafe_b64encode(document_id.encode("utf-8")).decode("ascii")

    @staticmethod
    def decode(cursor: str) -> str:
        """Decode a cursor back into the document id it was built from.

        Raises:
            MalformedCursor: If the cursor is not valid base64 of a non-empty
                UTF-8 string.
        """
        if not isinstance(cursor, str) or not cursor:
            raise MalformedCursor(str(cursor), "empty cursor")
        try:
            raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
            document_id = raw.decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise MalformedCursor(cursor, str(e)) from e
        if not document_id or "/" in document_id:
            raise MalformedCursor(cursor, "not a document id")
        return document_id


def encode_cursor(document_id: str) -> str:
    """Shortcut for CursorCodec.encode."""
    return CursorCodec.encode(document_id)


def decode_cursor(cursor: str) -> str:
    """Shortcut for CursorCodec.decode."""
    return CursorCodec.decode(cursor)


__all__ = ["CursorCodec", "MalformedCursor", "decode_cursor", "encode_cursor"]
