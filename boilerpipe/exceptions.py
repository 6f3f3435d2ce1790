"""
Custom exceptions for boilerpipe.

Error philosophy:
  - DocumentReadError  → FAIL HARD: the byte source failed, segmentation stops.
  - TextDocumentError  → PARTIAL RETURN: the stream was drained to the end,
                         the error aggregates every recoverable parse error
                         and carries the document built so far.

End-of-stream is never an error.
"""

from typing import Optional


class BoilerpipeError(Exception):
    """Base exception for all boilerpipe errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL HARD: stops the parse ---

class DocumentReadError(BoilerpipeError):
    """
    Raised when the underlying source fails for a reason other than
    end-of-stream.

    Nothing is returned: the parse aborts at the first transport error.
    """
    pass


# --- PARTIAL RETURN: the document is still usable ---

class TextDocumentError(BoilerpipeError):
    """
    Aggregate of the recoverable errors reported while tokenizing a document.

    The token stream is always drained before this is raised, so
    `document` holds every block that could be produced.
    """

    def __init__(self, errors: list[str], document=None, details: Optional[dict] = None):
        super().__init__(f"{len(errors)} error(s) while parsing document", details)
        self.errors = list(errors)
        self.document = document

    def __str__(self) -> str:
        return "\n".join(self.errors)
