"""Decide whether a decoded remark is shown."""

from __future__ import annotations

from remarkscope.remarks.documents import DebugLocation
from remarkscope.remarks.schemas import LoadOptions


def is_accepted(
    name: str,
    location: DebugLocation,
    options: LoadOptions,
) -> bool:
    """Apply the acceptance rules in order.

    * Without ``include_external``, absolute paths (toolchain and system
      sources) are rejected.
    * Without ``include_external``, paths that do not name a regular file
      under ``source_dir`` are rejected.
    * Names listed in ``excluded_names`` are always rejected.
    """
    if not options.include_external:
        if location.file.startswith("/"):
            return False
        if not (options.source_dir / location.file).is_file():
            return False
    return name not in options.excluded_names
