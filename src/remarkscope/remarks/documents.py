"""Raw remark documents as they appear in ``.opt.yaml`` files.

Documents are decoded one at a time so that a corrupt document never
takes the rest of the file down with it. PyYAML's ``BaseLoader`` keeps
every scalar as its source text (``Line: 131`` stays ``"131"``); pydantic
then coerces the fields that are really numbers. Argument values in the
generic bucket therefore keep exactly the text the compiler wrote.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Annotated, Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    model_validator,
)

from remarkscope.constants import MAX_LINE_NUMBER, DocumentKind

_DOCUMENT_START = "---"
_DOCUMENT_END = "..."


class DebugLocation(BaseModel):
    """``DebugLoc: { File, Line, Column }``."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(alias="File")
    line: int = Field(alias="Line", ge=0, le=MAX_LINE_NUMBER)
    column: int = Field(alias="Column", ge=0, le=MAX_LINE_NUMBER)


# ── Arguments ────────────────────────────────────────────


class StringArg(BaseModel):
    text: str = Field(alias="String")

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"String": data}
        return data


class ReasonArg(BaseModel):
    text: str = Field(alias="Reason")


class CalleeArg(BaseModel):
    name: str = Field(alias="Callee")
    debug_loc: DebugLocation | None = Field(default=None, alias="DebugLoc")


class CallerArg(BaseModel):
    name: str = Field(alias="Caller")
    debug_loc: DebugLocation | None = Field(default=None, alias="DebugLoc")


class OtherArg(BaseModel):
    """Any other ``Key: value`` argument (Cost, Type, ClobberedBy, ...).

    ``DebugLoc`` is always taken out of ``values``; it is kept only when
    it decodes to a location.
    """

    values: dict[str, Any] = Field(default_factory=lambda: dict[str, Any]())
    debug_loc: DebugLocation | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_location(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        raw_location = values.pop("DebugLoc", None)
        debug_loc = None
        if raw_location is not None:
            try:
                debug_loc = DebugLocation.model_validate(raw_location)
            except ValidationError:
                debug_loc = None
        return {"values": values, "debug_loc": debug_loc}


_KNOWN_ARG_KEYS = ("String", "Callee", "Caller", "Reason")


def _arg_kind(value: Any) -> str:
    """Pick the argument variant from the record's keys."""
    if isinstance(value, str):
        return "String"
    if isinstance(value, dict):
        for key in _KNOWN_ARG_KEYS:
            if key in value:
                return key
    return "Other"


RawArgument = Annotated[
    Annotated[StringArg, Tag("String")]
    | Annotated[ReasonArg, Tag("Reason")]
    | Annotated[CalleeArg, Tag("Callee")]
    | Annotated[CallerArg, Tag("Caller")]
    | Annotated[OtherArg, Tag("Other")],
    Discriminator(_arg_kind),
]


# ── Documents ────────────────────────────────────────────


class MissedDocument(BaseModel):
    """A ``--- !Missed`` document."""

    pass_name: str = Field(alias="Pass")
    name: str = Field(alias="Name")
    function: str = Field(alias="Function")
    debug_loc: DebugLocation | None = Field(default=None, alias="DebugLoc")
    hotness: int | None = Field(default=None, alias="Hotness")
    args: list[RawArgument] = Field(
        default_factory=lambda: list[RawArgument](), alias="Args"
    )

    @model_validator(mode="before")
    @classmethod
    def _empty_args(cls, data: Any) -> Any:
        # "Args:" with nothing under it loads as an empty scalar
        if isinstance(data, dict) and data.get("Args") == "":
            return {**data, "Args": []}
        return data


class PassedDocument(BaseModel):
    """A ``--- !Passed`` document; its contents are never inspected."""


class AnalysisDocument(BaseModel):
    """A ``--- !Analysis`` document; its contents are never inspected."""


RemarkDocument = MissedDocument | PassedDocument | AnalysisDocument


class DocumentDecodeError(ValueError):
    """Raised when a single document cannot be decoded."""


def split_documents(lines: Iterable[str]) -> Iterator[str]:
    """Lazily cut a remark stream into self-contained YAML documents.

    A document starts at a ``---`` line and ends at a ``...`` line or at
    the start of the next document.
    """
    buffer: list[str] = []
    for line in lines:
        stripped = line.rstrip("\r\n")
        if stripped == _DOCUMENT_END:
            if _has_content(buffer):
                yield "".join(buffer)
            buffer = []
            continue
        if stripped.startswith(_DOCUMENT_START) and (
            len(stripped) == len(_DOCUMENT_START)
            or stripped[len(_DOCUMENT_START)] in " \t"
        ):
            if _has_content(buffer):
                yield "".join(buffer)
            buffer = []
        buffer.append(line if line.endswith("\n") else line + "\n")
    if _has_content(buffer):
        yield "".join(buffer)


def _has_content(buffer: list[str]) -> bool:
    return any(
        line.strip() and not line.lstrip().startswith("#")
        for line in buffer
    )


def decode_document(text: str) -> RemarkDocument:
    """Decode one YAML document into its tagged variant.

    Raises :class:`DocumentDecodeError` for malformed YAML, a missing or
    unknown tag, or fields that fail validation. Bytes that were not
    valid UTF-8 arrive as lone surrogates and fail the document.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as err:
        raise DocumentDecodeError(f"invalid UTF-8: {err}") from err

    loader = yaml.BaseLoader(text)
    try:
        node = loader.get_single_node()
        if node is None:
            raise DocumentDecodeError("empty document")
        data = loader.construct_document(node)
    except yaml.YAMLError as err:
        raise DocumentDecodeError(str(err)) from err
    finally:
        loader.dispose()

    match node.tag:
        case DocumentKind.MISSED:
            try:
                return MissedDocument.model_validate(data)
            except ValidationError as err:
                raise DocumentDecodeError(str(err)) from err
        case DocumentKind.PASSED:
            return PassedDocument()
        case DocumentKind.ANALYSIS:
            return AnalysisDocument()
        case _:
            raise DocumentDecodeError(f"unknown remark tag {node.tag!r}")
