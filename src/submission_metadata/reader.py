"""Row-by-row reading of tab-separated metadata files.

This module wraps a binary stream in a csv.DictReader. The header row is
read when the reader is created; data rows are read one at a time as the
reader is iterated, so files of any size can be processed.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import TYPE_CHECKING

from submission_metadata import config

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType
    from typing import BinaryIO

logger = logging.getLogger(__name__)


def _raise_field_size_limit(limit: int) -> None:
    """Raise the csv module's per-field limit, never lowering it."""
    if csv.field_size_limit() < limit:
        csv.field_size_limit(limit)


class MetadataReader:
    """Forward-only cursor over the rows of a TSV metadata file.

    Iterating yields ``(row_number, row)`` pairs. Row numbers follow the
    file layout: the header is row 1, the first data row is row 2. Each row
    maps header name to raw cell value in header order. Cells missing from
    a short row are left out of the mapping; cells beyond the last header
    are dropped.

    Closing the reader closes the underlying stream.
    """

    def __init__(self, stream: BinaryIO, *, encoding: str | None = None):
        _raise_field_size_limit(config.METADATA_FIELD_SIZE_LIMIT)
        self._text = io.TextIOWrapper(stream, encoding=encoding or config.METADATA_ENCODING, newline="")
        self._reader = csv.DictReader(self._text, delimiter="\t")
        try:
            self.header_names: list[str] = list(self._reader.fieldnames or [])
        except BaseException:
            self.close()
            raise

    def __iter__(self) -> Iterator[tuple[int, dict[str, str]]]:
        for raw in self._reader:
            # DictReader skips blank lines, so count physical rows from line_num.
            row_number = self._reader.line_num
            surplus = raw.pop(None, None)
            if surplus:
                logger.debug(f"Row {row_number}: dropping {len(surplus)} cells beyond the header")
            yield row_number, {key: value for key, value in raw.items() if value is not None}

    @property
    def closed(self) -> bool:
        return self._text.closed

    def close(self) -> None:
        """Close the reader and its stream. Safe to call more than once."""
        if not self._text.closed:
            self._text.close()

    def __enter__(self) -> MetadataReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
