"""Header resolution for submission metadata files.

Decides which column carries the submission id, which column links a row
to its sequences in the accompanying FASTA file, and whether a revision
file carries the accession column.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from submission_metadata.exceptions import HeaderAmbiguousError, HeaderMissingError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

SUBMISSION_ID_HEADER = "submissionId"
FASTA_ID_HEADER = "fastaId"
ACCESSION_HEADER = "accession"

# Canonical header name -> older spellings still accepted from previously
# issued submission templates. At most one spelling may appear in a file.
SUBMISSION_ID_HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    SUBMISSION_ID_HEADER: ("submissionIdOld",),
}


@dataclass(frozen=True)
class ResolvedHeaders:
    """Header names selected for routing the rows of one file.

    Attributes:
        submission_id: Column holding the submission id
        fasta_id: Column holding the fasta ids (the submission id column
            when the file has no dedicated fasta id column)
        accession: Column holding the accession, revision files only
    """

    submission_id: str
    fasta_id: str
    accession: str | None = None

    @property
    def has_dedicated_fasta_id(self) -> bool:
        """Whether fasta ids come from their own column."""
        return self.fasta_id != self.submission_id


def submission_id_spellings() -> list[str]:
    """All accepted spellings of the submission id header, canonical first."""
    spellings: list[str] = []
    for canonical, aliases in SUBMISSION_ID_HEADER_ALIASES.items():
        spellings.append(canonical)
        spellings.extend(aliases)
    return spellings


def resolve_submission_id_header(header_names: Iterable[str]) -> str:
    """Return the header that holds the submission id.

    Args:
        header_names: Column names from the header row, in any order

    Returns:
        The single accepted spelling present in the header row

    Raises:
        HeaderMissingError: If no accepted spelling is present
        HeaderAmbiguousError: If more than one accepted spelling is present
    """
    present = set(header_names)
    spellings = submission_id_spellings()
    found = [name for name in spellings if name in present]

    if not found:
        quoted = " or ".join(f"'{name}'" for name in spellings)
        raise HeaderMissingError(
            f"The metadata file does not contain either header {quoted}",
            headers=tuple(spellings),
        )
    if len(found) > 1:
        quoted = " and ".join(f"'{name}'" for name in found)
        raise HeaderAmbiguousError(
            f"The metadata file contains both {quoted}. Only one is allowed.",
            headers=tuple(found),
        )
    return found[0]


def resolve_fasta_id_header(header_names: Iterable[str], submission_id_header: str) -> str:
    """Return the header that links rows to FASTA entries.

    Falls back to the submission id header when there is no dedicated
    fasta id column.
    """
    if FASTA_ID_HEADER in set(header_names):
        return FASTA_ID_HEADER
    return submission_id_header


def require_accession_header(header_names: Iterable[str]) -> None:
    """Raise HeaderMissingError unless the accession header is present."""
    if ACCESSION_HEADER not in set(header_names):
        raise HeaderMissingError(
            f"The revised metadata file does not contain the header '{ACCESSION_HEADER}'",
            headers=(ACCESSION_HEADER,),
        )


def resolve_headers(header_names: Iterable[str], *, revision: bool = False) -> ResolvedHeaders:
    """Resolve every routing header of a file in one go.

    Args:
        header_names: Column names from the header row
        revision: Also require the accession header

    Returns:
        ResolvedHeaders for the file

    Raises:
        HeaderMissingError: If a required header is absent
        HeaderAmbiguousError: If the submission id header is given twice
    """
    names = list(header_names)
    submission_id = resolve_submission_id_header(names)
    fasta_id = resolve_fasta_id_header(names, submission_id)

    accession = None
    if revision:
        require_accession_header(names)
        accession = ACCESSION_HEADER

    resolved = ResolvedHeaders(submission_id=submission_id, fasta_id=fasta_id, accession=accession)
    logger.debug(f"Resolved headers: {resolved}")
    return resolved
