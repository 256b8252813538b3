"""Decode remark files into :class:`Remark` lists."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable
from pathlib import Path

from remarkscope.remarks.composer import compose_message
from remarkscope.remarks.demangler import demangle
from remarkscope.remarks.documents import (
    DocumentDecodeError,
    MissedDocument,
    decode_document,
    split_documents,
)
from remarkscope.remarks.paths import to_location
from remarkscope.remarks.policy import is_accepted
from remarkscope.remarks.schemas import Function, LoadOptions, Remark

logger = logging.getLogger(__name__)


def load_remarks_from_file(
    path: Path, options: LoadOptions
) -> list[Remark]:
    """Parse one ``.opt.yaml`` file.

    Raises :class:`OSError` when the file cannot be opened or read.
    An empty file is not an error and yields no remarks.
    """
    try:
        handle = open(path, encoding="utf-8", errors="surrogateescape")
    except OSError as err:
        raise OSError(f"Cannot open remark file {path}: {err}") from err

    with handle:
        logger.debug("event=remark_file_parse path=%s", path)
        if os.fstat(handle.fileno()).st_size == 0:
            logger.debug("event=remark_file_empty path=%s", path)
            return []

        start = time.perf_counter()
        remarks = parse_remarks(handle, options)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "event=remark_file_parsed path=%s remarks=%d"
            " duration_ms=%.1f",
            path,
            len(remarks),
            duration_ms,
        )
        return remarks


def parse_remarks(
    lines: Iterable[str], options: LoadOptions
) -> list[Remark]:
    """Decode every document in ``lines`` and keep the accepted remarks.

    Documents that fail to decode are skipped. Only ``!Missed`` remarks
    with a ``DebugLoc`` can be shown; everything else is dropped.
    """
    remarks: list[Remark] = []
    for text in split_documents(lines):
        try:
            document = decode_document(text)
        except DocumentDecodeError as err:
            logger.debug("event=remark_decode_failed error=%s", err)
            continue

        if not isinstance(document, MissedDocument):
            continue
        remark = _build_remark(document, options)
        if remark is not None:
            remarks.append(remark)
    return remarks


def _build_remark(
    document: MissedDocument, options: LoadOptions
) -> Remark | None:
    location = document.debug_loc
    if location is None:
        return None
    if not is_accepted(document.name, location, options):
        return None

    return Remark(
        pass_name=document.pass_name,
        name=document.name,
        function=Function(
            name=demangle(document.function),
            location=to_location(location, options),
        ),
        message=tuple(compose_message(document.args, options)),
        hotness=document.hotness,
    )
