"""Compose a remark message from its ``Args`` list.

Plain text accumulates in a buffer. Every located argument flushes the
buffer as a :class:`PlainText` part and then adds an
:class:`AnnotatedText` part, so a finished message alternates between
plain runs and annotated spans and never holds two plain parts in a row.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from remarkscope.remarks.demangler import demangle
from remarkscope.remarks.documents import (
    CalleeArg,
    CallerArg,
    OtherArg,
    RawArgument,
    ReasonArg,
    StringArg,
)
from remarkscope.remarks.paths import to_location
from remarkscope.remarks.schemas import (
    AnnotatedText,
    LoadOptions,
    MessagePart,
    PlainText,
)


class _MessageBuilder:
    def __init__(self) -> None:
        self.parts: list[MessagePart] = []
        self._buffer: list[str] = []

    def add_text(self, text: str) -> None:
        self._buffer.append(text)

    def add_annotated(self, part: AnnotatedText) -> None:
        self.flush()
        self.parts.append(part)

    def flush(self) -> None:
        text = "".join(self._buffer)
        self._buffer = []
        if text:
            self.parts.append(PlainText(text=text))


def aggregate_values(values: Mapping[str, Any]) -> str:
    """Concatenate scalar values in ascending key order, dropping keys.

    ``{"Line": "4", "Column": "18"}`` gives ``"184"``. Nested sequences
    and mappings are skipped.
    """
    return "".join(
        _scalar_text(values[key])
        for key in sorted(values)
        if _is_scalar(values[key])
    )


def _is_scalar(value: Any) -> bool:
    return isinstance(value, str | int | float | bool)


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compose_message(
    arguments: Iterable[RawArgument],
    options: LoadOptions,
) -> list[MessagePart]:
    """Build the ordered message parts for one remark."""
    builder = _MessageBuilder()

    for arg in arguments:
        match arg:
            case StringArg(text=text) | ReasonArg(text=text):
                builder.add_text(text)
            case CalleeArg(name=name, debug_loc=loc) | CallerArg(
                name=name, debug_loc=loc
            ) if loc is not None:
                builder.add_annotated(
                    AnnotatedText(
                        text=demangle(name),
                        location=to_location(loc, options),
                    )
                )
            case CalleeArg(name=name) | CallerArg(name=name):
                builder.add_text(demangle(name))
            case OtherArg(values=values, debug_loc=loc) if loc is not None:
                builder.add_annotated(
                    AnnotatedText(
                        text=aggregate_values(values),
                        location=to_location(loc, options),
                    )
                )
            case OtherArg(values=values):
                builder.add_text(aggregate_values(values))

    builder.flush()
    return builder.parts
