"""Pydantic models for loaded remarks and load options."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from remarkscope.constants import MAX_LINE_NUMBER


class Location(BaseModel):
    """A position in a source file."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = Field(ge=0, le=MAX_LINE_NUMBER)
    column: int = Field(ge=0, le=MAX_LINE_NUMBER)


class Function(BaseModel):
    """The function a remark was emitted for."""

    model_config = ConfigDict(frozen=True)

    name: str  # demangled
    location: Location | None = None


class PlainText(BaseModel):
    """A run of message text without a source location."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class AnnotatedText(BaseModel):
    """Message text that points at a source location."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["annotated"] = "annotated"
    text: str
    location: Location


MessagePart = Annotated[
    PlainText | AnnotatedText, Field(discriminator="kind")
]


class Remark(BaseModel):
    """One missed-optimization remark ready for display."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pass_name: str = Field(alias="pass")
    name: str
    function: Function
    message: tuple[MessagePart, ...] = ()
    hotness: int | None = None


class LoadOptions(BaseModel):
    """Acceptance policy shared read-only by every file parse."""

    model_config = ConfigDict(frozen=True)

    # Load remarks whose location is outside the source tree
    include_external: bool = False
    source_dir: Path = Path(".")
    # Remark names that should be ignored
    excluded_names: frozenset[str] = frozenset()
    # Local checkout substituted for /rustc/<commit>/ paths
    toolchain_source_root: Path | None = None
