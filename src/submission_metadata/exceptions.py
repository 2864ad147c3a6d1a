"""Errors raised while validating submission metadata files.

Every error here is fatal for the whole submission attempt: a caller that
catches one must discard any entries produced so far for that file.

Header-level errors are raised when an entry sequence is constructed.
Row-level errors are raised when the offending row is pulled.
"""

from __future__ import annotations


class UnprocessableEntityError(ValueError):
    """Base class for metadata input that cannot be processed."""


class HeaderError(UnprocessableEntityError):
    """The header row of a metadata file is unusable.

    Attributes:
        headers: The recognized header names the error is about
    """

    def __init__(self, message: str, headers: tuple[str, ...] = ()):
        super().__init__(message)
        self.headers = headers


class HeaderMissingError(HeaderError):
    """A required header is absent."""


class HeaderAmbiguousError(HeaderError):
    """More than one spelling of the same header is present."""


class RowError(UnprocessableEntityError):
    """A data row violates one of the per-row rules.

    Attributes:
        row_number: Row number in the file (1-indexed, header is row 1)
        row: Field values of the offending row, keyed by header name
    """

    def __init__(self, message: str, row_number: int, row: dict[str, str]):
        super().__init__(f"{message} (row {row_number}): {format_row(row)}")
        self.row_number = row_number
        self.row = row


class RowMissingIdentifierError(RowError):
    """The submission id value is absent or empty."""


class RowIdentifierHasWhitespaceError(RowError):
    """The submission id value contains a whitespace character."""


class RowMissingAccessionError(RowError):
    """The accession value is absent or empty."""


class RowMissingFastaIdError(RowError):
    """The fasta id value is absent or empty."""


class RowEmptyMetadataError(RowError):
    """No metadata columns remain once the routing columns are removed."""


def format_row(row: dict[str, str]) -> str:
    """Render a row's field values for an error message."""
    return "{" + ", ".join(f"{key}={value!r}" for key, value in row.items()) + "}"
