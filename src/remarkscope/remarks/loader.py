"""Load every remark file of a directory in parallel."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from remarkscope.constants import (
    DEFAULT_LOAD_CONCURRENCY,
    EXPECTED_EXTENSION,
)
from remarkscope.remarks.decoder import load_remarks_from_file
from remarkscope.remarks.progress import (
    LoadCallback,
    notify_advance,
    notify_finish,
    notify_start,
)
from remarkscope.remarks.schemas import LoadOptions, Remark

logger = logging.getLogger(__name__)


def list_remark_files(directory: Path) -> list[Path]:
    """Return the ``*.opt.yaml`` regular files of ``directory``, by name.

    Raises :class:`FileNotFoundError` if the directory does not exist and
    :class:`OSError` if it cannot be listed.
    """
    try:
        resolved = Path(directory).resolve(strict=True)
    except OSError as err:
        raise FileNotFoundError(
            f"Cannot find remark directory {directory}"
        ) from err

    try:
        entries = sorted(resolved.iterdir())
    except OSError as err:
        # OSError(errno, ...) picks the matching subclass
        raise OSError(
            err.errno, f"Cannot read remark directory {resolved}"
        ) from err

    return [
        entry
        for entry in entries
        if entry.name.endswith(EXPECTED_EXTENSION) and entry.is_file()
    ]


async def load_remarks_from_dir(
    directory: Path,
    options: LoadOptions,
    callback: LoadCallback | None = None,
    *,
    max_concurrency: int = DEFAULT_LOAD_CONCURRENCY,
) -> list[Remark]:
    """Parse all remark files under ``directory``.

    Each file is parsed in a worker thread, at most ``max_concurrency``
    at a time. Results keep the order of :func:`list_remark_files`, not
    the order in which files finish. A file that fails to load is logged
    and left out; only a missing or unreadable directory is raised.
    """
    files = list_remark_files(directory)
    logger.debug(
        "event=remark_dir_load files=%d dir=%s", len(files), directory
    )
    notify_start(callback, len(files))

    results: list[list[Remark]] = [[] for _ in files]
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _load(idx: int, path: Path) -> None:
        async with semaphore:
            try:
                results[idx] = await asyncio.to_thread(
                    load_remarks_from_file, path, options
                )
            except Exception:  # noqa: BLE001
                logger.error(
                    "event=remark_file_failed path=%s",
                    path,
                    exc_info=True,
                )
            notify_advance(callback)

    await asyncio.gather(
        *(_load(i, path) for i, path in enumerate(files))
    )
    notify_finish(callback)

    return [remark for remarks in results for remark in remarks]


def load_remarks_from_dir_sync(
    directory: Path,
    options: LoadOptions,
    callback: LoadCallback | None = None,
    *,
    max_concurrency: int = DEFAULT_LOAD_CONCURRENCY,
) -> list[Remark]:
    """Blocking wrapper around :func:`load_remarks_from_dir`."""
    return asyncio.run(
        load_remarks_from_dir(
            directory,
            options,
            callback,
            max_concurrency=max_concurrency,
        )
    )
