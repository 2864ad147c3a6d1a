"""Streaming validation of tab-separated submission metadata files.

Main entry points:
    - metadata_entry_sequence(): Validated entries of a new submission
    - revision_entry_sequence(): Validated entries of a revision
    - open_metadata_stream(): Open a file and resolve its headers only

Example:
    from submission_metadata import metadata_entry_sequence

    with path.open("rb") as stream:
        for entry in metadata_entry_sequence(stream, include_fasta_ids=True):
            print(entry.submission_id, entry.fasta_ids)
"""

from submission_metadata.entries import (
    EntrySequence,
    MetadataEntry,
    RevisionEntry,
    build_metadata_entry,
    build_revision_entry,
    metadata_entry_sequence,
    open_metadata_stream,
    parse_fasta_ids,
    revision_entry_sequence,
)
from submission_metadata.exceptions import (
    HeaderAmbiguousError,
    HeaderError,
    HeaderMissingError,
    RowEmptyMetadataError,
    RowError,
    RowIdentifierHasWhitespaceError,
    RowMissingAccessionError,
    RowMissingFastaIdError,
    RowMissingIdentifierError,
    UnprocessableEntityError,
)
from submission_metadata.headers import (
    ACCESSION_HEADER,
    FASTA_ID_HEADER,
    SUBMISSION_ID_HEADER,
    SUBMISSION_ID_HEADER_ALIASES,
    ResolvedHeaders,
    require_accession_header,
    resolve_fasta_id_header,
    resolve_headers,
    resolve_submission_id_header,
)
from submission_metadata.reader import MetadataReader

__all__ = [
    "ACCESSION_HEADER",
    "FASTA_ID_HEADER",
    "SUBMISSION_ID_HEADER",
    "SUBMISSION_ID_HEADER_ALIASES",
    "EntrySequence",
    "HeaderAmbiguousError",
    "HeaderError",
    "HeaderMissingError",
    "MetadataEntry",
    "MetadataReader",
    "ResolvedHeaders",
    "RevisionEntry",
    "RowEmptyMetadataError",
    "RowError",
    "RowIdentifierHasWhitespaceError",
    "RowMissingAccessionError",
    "RowMissingFastaIdError",
    "RowMissingIdentifierError",
    "UnprocessableEntityError",
    "build_metadata_entry",
    "build_revision_entry",
    "metadata_entry_sequence",
    "open_metadata_stream",
    "parse_fasta_ids",
    "require_accession_header",
    "resolve_fasta_id_header",
    "resolve_headers",
    "resolve_submission_id_header",
    "revision_entry_sequence",
]
