"""Re-anchor toolchain source paths onto a local checkout."""

from __future__ import annotations

from remarkscope.constants import TOOLCHAIN_PATH_PREFIX
from remarkscope.remarks.documents import DebugLocation
from remarkscope.remarks.schemas import Location, LoadOptions


def normalize_path(path: str, options: LoadOptions) -> str:
    """Map ``/rustc/<commit>/<rest>`` to ``<toolchain_source_root>/<rest>``.

    Anything else, or any path when no root is configured, is returned
    unchanged.
    """
    root = options.toolchain_source_root
    if root is None or not path.startswith(TOOLCHAIN_PATH_PREFIX):
        return path

    rest = path[len(TOOLCHAIN_PATH_PREFIX):]
    index = rest.find("/")
    if index == -1:
        return path
    return str(root / rest[index + 1:]).replace("\\", "/")


def to_location(debug_loc: DebugLocation, options: LoadOptions) -> Location:
    """Build a :class:`Location` with its file path normalized."""
    return Location(
        file=normalize_path(debug_loc.file, options),
        line=debug_loc.line,
        column=debug_loc.column,
    )
