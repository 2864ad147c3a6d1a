#!/usr/bin/env python3
"""Check a submission metadata file before uploading it.

Streams the file through the same validation the ingestion pipeline uses
and reports the first problem found, if any.

Usage:
    uv run python -m submission_metadata.scripts.validate_metadata metadata.tsv
    uv run python -m submission_metadata.scripts.validate_metadata metadata.tsv --no-fasta-ids
    uv run python -m submission_metadata.scripts.validate_metadata revision.tsv --revision --verbose
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from submission_metadata import (
    MetadataEntry,
    RevisionEntry,
    UnprocessableEntityError,
    metadata_entry_sequence,
    revision_entry_sequence,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def describe_entry(entry: MetadataEntry | RevisionEntry) -> str:
    """One-line summary of an entry for display."""
    parts = [entry.submission_id]
    if isinstance(entry, RevisionEntry):
        parts.append(f"accession={entry.accession}")
    if entry.fasta_ids is not None:
        parts.append(f"fasta_ids={','.join(entry.fasta_ids)}")
    parts.append(f"{len(entry.metadata)} metadata columns")
    return "  ".join(parts)


@click.command()
@click.argument("metadata_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--revision",
    is_flag=True,
    help="Validate as a revision file (requires an accession column)",
)
@click.option(
    "--fasta-ids/--no-fasta-ids",
    default=True,
    show_default=True,
    help="Require fasta ids linking each row to sequences",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Print every valid entry",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(
    metadata_file: Path,
    revision: bool,
    fasta_ids: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Validate METADATA_FILE, a tab-separated submission metadata file.

    Exits with status 1 at the first header or row that would be rejected
    on upload.
    """
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    kind = "revision" if revision else "submission"
    click.echo(f"Validating {metadata_file.name} as {kind} metadata...")

    count = 0
    try:
        with metadata_file.open("rb") as stream:
            if revision:
                entries = revision_entry_sequence(stream, include_fasta_ids=fasta_ids)
            else:
                entries = metadata_entry_sequence(stream, include_fasta_ids=fasta_ids)
            with entries:
                for entry in entries:
                    count += 1
                    if verbose:
                        click.echo(f"  {describe_entry(entry)}")
    except UnprocessableEntityError as e:
        click.echo(f"Invalid: {e}", err=True)
        if count:
            click.echo(f"{count} rows before the error were valid", err=True)
        sys.exit(1)

    click.echo(f"OK: {count} valid entries")


if __name__ == "__main__":
    main()
