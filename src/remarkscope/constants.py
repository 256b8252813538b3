"""Shared constants — single source of truth for cross-module values.

StrEnum members are str-compatible, so downstream code (log lines,
JSON output) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class DocumentKind(StrEnum):
    """YAML tags that discriminate remark documents."""

    MISSED = "!Missed"
    PASSED = "!Passed"
    ANALYSIS = "!Analysis"


class OutputFormat(StrEnum):
    """CLI output formats."""

    SUMMARY = "summary"
    JSON = "json"


# ── File Selection ───────────────────────────────────────

# Remark files emitted by -fsave-optimization-record
EXPECTED_EXTENSION = ".opt.yaml"

# ── Path Remapping ───────────────────────────────────────

# Paths of a distributed toolchain look like /rustc/<commit>/library/...
TOOLCHAIN_PATH_PREFIX = "/rustc/"

# ── Demangling ───────────────────────────────────────────

# "::" + "h" + 16 hex digits
LEGACY_HASH_SUFFIX_LENGTH = 19

# ── Loading ──────────────────────────────────────────────

DEFAULT_LOAD_CONCURRENCY = 8

MAX_LINE_NUMBER = 0xFFFF_FFFF
