"""Validated entries decoded from submission metadata files.

Two kinds of files are supported:

- new submissions, decoded into MetadataEntry records by
  metadata_entry_sequence();
- revisions of already accessioned records, decoded into RevisionEntry
  records by revision_entry_sequence().

Both functions resolve the header row before returning, so a file with
unusable headers fails immediately. Rows are then validated one at a time
as the returned sequence is iterated; the first invalid row raises and
ends the sequence.

Example:
    with path.open("rb") as stream:
        for entry in metadata_entry_sequence(stream):
            store(entry)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from submission_metadata.exceptions import (
    RowEmptyMetadataError,
    RowIdentifierHasWhitespaceError,
    RowMissingAccessionError,
    RowMissingFastaIdError,
    RowMissingIdentifierError,
)
from submission_metadata.headers import ResolvedHeaders, resolve_headers
from submission_metadata.reader import MetadataReader

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import BinaryIO

logger = logging.getLogger(__name__)

FASTA_ID_SEPARATOR = ","


@dataclass(frozen=True)
class MetadataEntry:
    """One row of a new submission.

    Attributes:
        submission_id: Submitter-chosen id of the row, without whitespace
        metadata: Remaining columns of the row, keyed by header name
        fasta_ids: Ids of the linked FASTA entries, None unless requested
    """

    submission_id: str
    metadata: dict[str, str]
    fasta_ids: list[str] | None = None


@dataclass(frozen=True)
class RevisionEntry:
    """One row of a revision of an already accessioned record.

    Attributes:
        submission_id: Submitter-chosen id of the row
        accession: Accession of the record being revised
        metadata: Remaining columns of the row, keyed by header name
        fasta_ids: Ids of the linked FASTA entries, None unless requested
    """

    submission_id: str
    accession: str
    metadata: dict[str, str]
    fasta_ids: list[str] | None = None


EntryT = TypeVar("EntryT", MetadataEntry, RevisionEntry)


class EntrySequence(Generic[EntryT]):
    """Lazy sequence of validated entries over one open metadata file.

    Each call to next() reads and validates exactly one row. The file is
    closed when the rows run out, when a row fails validation, or when
    close() is called. The sequence can also be used as a context manager.
    """

    def __init__(
        self,
        reader: MetadataReader,
        headers: ResolvedHeaders,
        build: Callable[[int, dict[str, str]], EntryT],
    ):
        self.reader = reader
        self.headers = headers
        self._rows = iter(reader)
        self._build = build
        self._finished = False
        self.entries_produced = 0

    def __iter__(self) -> EntrySequence[EntryT]:
        return self

    def __next__(self) -> EntryT:
        if self._finished:
            raise StopIteration
        try:
            row_number, row = next(self._rows)
            entry = self._build(row_number, row)
        except StopIteration:
            logger.info(f"Read {self.entries_produced} valid entries")
            self.close()
            raise
        except BaseException:
            self.close()
            raise
        self.entries_produced += 1
        return entry

    def close(self) -> None:
        """Stop the sequence and close the underlying file."""
        self._finished = True
        self.reader.close()

    def __enter__(self) -> EntrySequence[EntryT]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def parse_fasta_ids(value: str) -> list[str]:
    """Split a comma-separated fasta id cell, dropping empty pieces.

    >>> parse_fasta_ids("a, b ,,c")
    ['a', 'b', 'c']
    """
    return [piece.strip() for piece in value.split(FASTA_ID_SEPARATOR) if piece.strip()]


def _fasta_ids_for_row(row_number: int, row: dict[str, str], headers: ResolvedHeaders) -> list[str]:
    value = row.get(headers.fasta_id)
    if not value:
        raise RowMissingFastaIdError(
            f"A row in metadata file contains no {headers.fasta_id}",
            row_number,
            row,
        )
    return parse_fasta_ids(value)


def _metadata_for_row(
    row_number: int,
    row: dict[str, str],
    routing_columns: set[str],
) -> dict[str, str]:
    metadata = {key: value for key, value in row.items() if key not in routing_columns}
    if not metadata:
        raise RowEmptyMetadataError("A row in metadata file contains no metadata columns", row_number, row)
    return metadata


def _routing_columns(headers: ResolvedHeaders, include_fasta_ids: bool) -> set[str]:
    columns = {headers.submission_id}
    if headers.accession is not None:
        columns.add(headers.accession)
    if include_fasta_ids and headers.has_dedicated_fasta_id:
        columns.add(headers.fasta_id)
    return columns


def build_metadata_entry(
    row_number: int,
    row: dict[str, str],
    headers: ResolvedHeaders,
    include_fasta_ids: bool = True,
) -> MetadataEntry:
    """Validate one row of a new submission and build its entry.

    Args:
        row_number: Row number in the file (header is row 1)
        row: Cell values keyed by header name
        headers: Routing headers resolved for the file
        include_fasta_ids: Require and parse the fasta id column

    Returns:
        The validated MetadataEntry

    Raises:
        RowMissingIdentifierError: Submission id absent or empty
        RowIdentifierHasWhitespaceError: Submission id contains whitespace
        RowMissingFastaIdError: Fasta ids requested but absent or empty
        RowEmptyMetadataError: No metadata columns left
    """
    submission_id = row.get(headers.submission_id)
    if not submission_id:
        raise RowMissingIdentifierError(
            f"A row in metadata file contains no {headers.submission_id}",
            row_number,
            row,
        )
    if any(char.isspace() for char in submission_id):
        raise RowIdentifierHasWhitespaceError(
            f"A value for {headers.submission_id} contains whitespace",
            row_number,
            row,
        )

    fasta_ids = _fasta_ids_for_row(row_number, row, headers) if include_fasta_ids else None
    metadata = _metadata_for_row(row_number, row, _routing_columns(headers, include_fasta_ids))
    return MetadataEntry(submission_id=submission_id, metadata=metadata, fasta_ids=fasta_ids)


def build_revision_entry(
    row_number: int,
    row: dict[str, str],
    headers: ResolvedHeaders,
    include_fasta_ids: bool = True,
) -> RevisionEntry:
    """Validate one row of a revision and build its entry.

    Unlike new submissions, the submission id is not checked for whitespace.

    Raises:
        RowMissingIdentifierError: Submission id absent or empty
        RowMissingAccessionError: Accession absent or empty
        RowMissingFastaIdError: Fasta ids requested but absent or empty
        RowEmptyMetadataError: No metadata columns left
    """
    if headers.accession is None:
        raise ValueError("Revision entries need headers resolved with revision=True")

    submission_id = row.get(headers.submission_id)
    if not submission_id:
        raise RowMissingIdentifierError(
            f"A row in metadata file contains no {headers.submission_id}",
            row_number,
            row,
        )

    accession = row.get(headers.accession)
    if not accession:
        raise RowMissingAccessionError(
            f"A row in metadata file contains no {headers.accession}",
            row_number,
            row,
        )

    fasta_ids = _fasta_ids_for_row(row_number, row, headers) if include_fasta_ids else None
    metadata = _metadata_for_row(row_number, row, _routing_columns(headers, include_fasta_ids))
    return RevisionEntry(
        submission_id=submission_id,
        accession=accession,
        metadata=metadata,
        fasta_ids=fasta_ids,
    )


def open_metadata_stream(
    stream: BinaryIO,
    *,
    revision: bool = False,
    encoding: str | None = None,
) -> tuple[MetadataReader, ResolvedHeaders]:
    """Open a metadata file and resolve its routing headers.

    The stream is closed before any header error propagates.

    Args:
        stream: Binary stream with TSV content, header row first
        revision: Also require the accession header
        encoding: Override for the configured text encoding

    Returns:
        The open reader, positioned at the first data row, and the headers

    Raises:
        HeaderMissingError: If a required header is absent
        HeaderAmbiguousError: If the submission id header is given twice
    """
    reader = MetadataReader(stream, encoding=encoding)
    try:
        headers = resolve_headers(reader.header_names, revision=revision)
    except BaseException:
        reader.close()
        raise
    return reader, headers


def metadata_entry_sequence(
    stream: BinaryIO,
    include_fasta_ids: bool = True,
    *,
    encoding: str | None = None,
) -> EntrySequence[MetadataEntry]:
    """Stream MetadataEntry records from a new-submission metadata file.

    Header errors are raised here. Row errors are raised while iterating.
    """
    reader, headers = open_metadata_stream(stream, encoding=encoding)

    def build(row_number: int, row: dict[str, str]) -> MetadataEntry:
        return build_metadata_entry(row_number, row, headers, include_fasta_ids)

    return EntrySequence(reader, headers, build)


def revision_entry_sequence(
    stream: BinaryIO,
    include_fasta_ids: bool,
    *,
    encoding: str | None = None,
) -> EntrySequence[RevisionEntry]:
    """Stream RevisionEntry records from a revision metadata file.

    Header errors, including a missing accession header, are raised here.
    Row errors are raised while iterating.
    """
    reader, headers = open_metadata_stream(stream, revision=True, encoding=encoding)

    def build(row_number: int, row: dict[str, str]) -> RevisionEntry:
        return build_revision_entry(row_number, row, headers, include_fasta_ids)

    return EntrySequence(reader, headers, build)
