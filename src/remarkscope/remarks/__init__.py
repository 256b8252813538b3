"""Remark ingestion — decode, filter, demangle and compose messages."""

from remarkscope.remarks.composer import aggregate_values, compose_message
from remarkscope.remarks.decoder import load_remarks_from_file, parse_remarks
from remarkscope.remarks.demangler import demangle
from remarkscope.remarks.loader import (
    list_remark_files,
    load_remarks_from_dir,
    load_remarks_from_dir_sync,
)
from remarkscope.remarks.paths import normalize_path
from remarkscope.remarks.policy import is_accepted
from remarkscope.remarks.progress import ConsoleProgress, LoadCallback
from remarkscope.remarks.schemas import (
    AnnotatedText,
    Function,
    LoadOptions,
    Location,
    MessagePart,
    PlainText,
    Remark,
)

__all__ = [
    "AnnotatedText",
    "ConsoleProgress",
    "Function",
    "LoadCallback",
    "LoadOptions",
    "Location",
    "MessagePart",
    "PlainText",
    "Remark",
    "aggregate_values",
    "compose_message",
    "demangle",
    "is_accepted",
    "list_remark_files",
    "load_remarks_from_dir",
    "load_remarks_from_dir_sync",
    "load_remarks_from_file",
    "normalize_path",
    "parse_remarks",
]
