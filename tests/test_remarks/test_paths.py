"""Tests for toolchain path remapping."""

from __future__ import annotations

from pathlib import Path

from remarkscope.remarks.documents import DebugLocation
from remarkscope.remarks.paths import normalize_path, to_location
from remarkscope.remarks.schemas import LoadOptions, Location

RUSTC_PATH = (
    "/rustc/08d00b40aef2017fe6dba3ff7d6476efa0c10888"
    "/library/std/src/io/buffered/bufreader/buffer.rs"
)


def _options(root: str | None) -> LoadOptions:
    return LoadOptions(
        include_external=True,
        toolchain_source_root=Path(root) if root else None,
    )


def test_toolchain_path_is_remapped() -> None:
    assert (
        normalize_path(RUSTC_PATH, _options("/foo/bar"))
        == "/foo/bar/library/std/src/io/buffered/bufreader/buffer.rs"
    )


def test_no_root_leaves_path_unchanged() -> None:
    assert normalize_path(RUSTC_PATH, _options(None)) == RUSTC_PATH


def test_other_prefix_unchanged() -> None:
    path = "/home/me/project/src/main.rs"
    assert normalize_path(path, _options("/foo/bar")) == path


def test_relative_path_unchanged() -> None:
    assert normalize_path("src/main.rs", _options("/foo")) == "src/main.rs"


def test_missing_identifier_separator_unchanged() -> None:
    path = "/rustc/08d00b40aef2017fe6dba3ff7d6476efa0c10888"
    assert normalize_path(path, _options("/foo/bar")) == path


def test_backslashes_become_forward_slashes() -> None:
    result = normalize_path(
        "/rustc/abc/library/core/src/lib.rs", _options("C:\\rust")
    )
    assert result == "C:/rust/library/core/src/lib.rs"


def test_to_location_normalizes_file() -> None:
    debug_loc = DebugLocation.model_validate(
        {"File": RUSTC_PATH, "Line": 114, "Column": 13}
    )
    assert to_location(debug_loc, _options("/foo/bar")) == Location(
        file="/foo/bar/library/std/src/io/buffered/bufreader/buffer.rs",
        line=114,
        column=13,
    )
