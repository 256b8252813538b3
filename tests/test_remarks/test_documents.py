"""Tests for splitting and decoding raw remark documents."""

from __future__ import annotations

import pytest

from remarkscope.remarks.documents import (
    AnalysisDocument,
    CalleeArg,
    DocumentDecodeError,
    MissedDocument,
    OtherArg,
    PassedDocument,
    StringArg,
    decode_document,
    split_documents,
)

MISSED = """\
--- !Missed
Pass:            inline
Name:            NoDefinition
DebugLoc:        { File: 'src/main.rs', Line: 7, Column: 5 }
Function:        main
Hotness:         12
Args:
  - Callee:          foo
  - String:          ' will not be inlined'
  - Cost:            '-5'
    DebugLoc:        { File: 'src/main.rs', Line: 2, Column: 1 }
"""


class TestSplitDocuments:
    def test_end_markers_split(self) -> None:
        text = "--- !Missed\nA: 1\n...\n--- !Passed\nB: 2\n...\n"
        docs = list(split_documents(text.splitlines(keepends=True)))
        assert docs == ["--- !Missed\nA: 1\n", "--- !Passed\nB: 2\n"]

    def test_start_marker_without_end_marker(self) -> None:
        text = "--- !Missed\nA: 1\n--- !Passed\nB: 2\n"
        docs = list(split_documents(text.splitlines(keepends=True)))
        assert len(docs) == 2

    def test_blank_stream_has_no_documents(self) -> None:
        assert list(split_documents(["\n", "  \n"])) == []

    def test_dashes_inside_value_do_not_split(self) -> None:
        text = "--- !Missed\nA: '---'\nB: ---x\n...\n"
        docs = list(split_documents(text.splitlines(keepends=True)))
        assert len(docs) == 1


class TestDecodeDocument:
    def test_missed_fields(self) -> None:
        doc = decode_document(MISSED)
        assert isinstance(doc, MissedDocument)
        assert doc.pass_name == "inline"
        assert doc.name == "NoDefinition"
        assert doc.function == "main"
        assert doc.hotness == 12
        assert doc.debug_loc is not None
        assert (doc.debug_loc.line, doc.debug_loc.column) == (7, 5)

    def test_undecodable_bytes_rejected(self) -> None:
        text = MISSED.replace("inline", "\udcff\udcfe")
        with pytest.raises(DocumentDecodeError, match="invalid UTF-8"):
            decode_document(text)

    def test_argument_variants(self) -> None:
        doc = decode_document(MISSED)
        assert isinstance(doc, MissedDocument)
        callee, string, cost = doc.args
        assert isinstance(callee, CalleeArg)
        assert callee.debug_loc is None
        assert isinstance(string, StringArg)
        assert string.text == " will not be inlined"
        assert isinstance(cost, OtherArg)
        assert cost.values == {"Cost": "-5"}
        assert cost.debug_loc is not None

    def test_numbers_keep_source_text(self) -> None:
        doc = decode_document(
            "--- !Missed\nPass: p\nName: n\nFunction: f\n"
            "Args:\n  - TotalCopiesCost: 5.000000e-01\n"
        )
        assert isinstance(doc, MissedDocument)
        (arg,) = doc.args
        assert isinstance(arg, OtherArg)
        assert arg.values == {"TotalCopiesCost": "5.000000e-01"}

    def test_empty_args(self) -> None:
        doc = decode_document(
            "--- !Missed\nPass: p\nName: n\nFunction: f\nArgs:\n"
        )
        assert isinstance(doc, MissedDocument)
        assert doc.args == []

    def test_passed_and_analysis(self) -> None:
        assert isinstance(
            decode_document("--- !Passed\nPass: inline\n"), PassedDocument
        )
        assert isinstance(
            decode_document("--- !Analysis\nPass: size-info\n"),
            AnalysisDocument,
        )

    @pytest.mark.parametrize(
        "text",
        [
            "--- !Missed\nName: n\nFunction: f\n",  # no Pass
            "--- !Missed\nPass: p\nFunction: f\n",  # no Name
            "--- !Bogus\nPass: p\nName: n\n",  # unknown tag
            "---\nPass: p\nName: n\nFunction: f\n",  # untagged
            "--- !Missed\nPass: [unterminated\n",  # bad YAML
            "--- !Missed\nPass: p\nName: n\nFunction: f\n"
            "DebugLoc: { File: a.rs, Line: -1, Column: 0 }\n",
        ],
    )
    def test_invalid_documents_raise(self, text: str) -> None:
        with pytest.raises(DocumentDecodeError):
            decode_document(text)
