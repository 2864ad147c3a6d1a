"""Environment-driven settings for reading metadata files.

Values are read once at import time. A ``.env`` file in the working
directory is honoured.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Text encoding of uploaded metadata files. utf-8-sig strips a leading BOM
# so it does not end up in the first header name.
METADATA_ENCODING = os.getenv("SUBMISSION_METADATA_ENCODING", "utf-8-sig")

# Upper bound for a single cell, in characters. The csv module default
# (128 KiB) is too small for some free-text metadata columns.
METADATA_FIELD_SIZE_LIMIT = int(os.getenv("SUBMISSION_METADATA_FIELD_SIZE_LIMIT", str(16 * 1024 * 1024)))
