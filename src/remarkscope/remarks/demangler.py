"""Turn mangled symbols into readable paths."""

from __future__ import annotations

import re

import cxxfilt
import rust_demangler

from remarkscope.constants import LEGACY_HASH_SUFFIX_LENGTH

# Compiled at import; read-only afterwards.
# ThinLTO clones carry a ".llvm.<hash>" suffix
_LLVM_SUFFIX_RE = re.compile(r"\.llvm\.[0-9A-Fa-f@]+\Z")
# v0 crate roots print with a "[hex]" disambiguator
_CRATE_DISAMBIGUATOR_RE = re.compile(r"(?<=\w)\[[0-9a-f]+\]")
_LEGACY_HASH_RE = re.compile(r"::[a-z0-9]{17}\Z")
# Legacy Rust symbols end in a 17h<16 hex> hash segment
_RUST_LEGACY_RE = re.compile(r"\A_ZN.*17h[0-9a-f]{16}E\Z")
_RUST_ESCAPE_RE = re.compile(r"\$(SP|BP|RF|LT|GT|LP|RP|C|u[0-9a-f]+)\$")

_RUST_ESCAPES: dict[str, str] = {
    "SP": "@",
    "BP": "*",
    "RF": "&",
    "LT": "<",
    "GT": ">",
    "LP": "(",
    "RP": ")",
    "C": ",",
}


def demangle(symbol: str) -> str:
    """Demangle ``symbol`` and drop a trailing legacy hash segment.

    ``_ZN3std2rt10lang_start17h9096f6f84fb08eb2E`` becomes
    ``std::rt::lang_start``. Symbols that are not mangled come back
    unchanged, so demangling twice gives the same result. Rust v0
    symbols (``_R...``) go through ``rust_demangler``; everything else
    through ``cxxfilt``.
    """
    symbol = _LLVM_SUFFIX_RE.sub("", symbol)
    if symbol.startswith("_R"):
        demangled = _demangle_rust_v0(symbol)
    else:
        try:
            demangled = cxxfilt.demangle(symbol)
        except cxxfilt.InvalidName:
            demangled = symbol
        else:
            if _RUST_LEGACY_RE.match(symbol):
                demangled = _decode_rust_escapes(demangled)

    if _LEGACY_HASH_RE.search(demangled):
        demangled = demangled[:-LEGACY_HASH_SUFFIX_LENGTH]
    return demangled


def _demangle_rust_v0(symbol: str) -> str:
    try:
        demangled = rust_demangler.demangle(symbol)
    except Exception:  # noqa: BLE001
        # Not a valid v0 symbol; keep it as written
        return symbol
    return _CRATE_DISAMBIGUATOR_RE.sub("", demangled)


def _decode_rust_escapes(path: str) -> str:
    """Decode ``$LT$``-style escapes used in legacy Rust identifiers."""
    if "$" not in path and ".." not in path:
        return path
    segments = []
    for segment in path.split("::"):
        if segment.startswith("_$"):
            segment = segment[1:]
        segment = _RUST_ESCAPE_RE.sub(_unescape, segment)
        segments.append(segment.replace("..", "::"))
    return "::".join(segments)


def _unescape(match: re.Match[str]) -> str:
    code = match.group(1)
    if code.startswith("u"):
        return chr(int(code[1:], 16))
    return _RUST_ESCAPES[code]
