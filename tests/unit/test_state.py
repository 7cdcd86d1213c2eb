"""
Tests for the AsmViewState dataclass.
"""
import pytest
from asmview.parsing import build_function
from asmview.utils.state import AsmViewState


class TestAsmViewStateDefaults:
    def test_default_fields(self):
        state = AsmViewState()
        assert state.listing_path == ""
        assert state.function is None
        assert state.asm_lines == []
        assert state.asm_mapping == {}
        assert state.diagnostics == []
        assert state.has_errors is False

    def test_has_errors(self):
        state = AsmViewState()
        state.error = "Malformed .loc directive at line 3: '.loc'"
        assert state.has_errors is True


class TestSourceMapping:
    def test_valid_mapping(self):
        state = AsmViewState()
        state.source_lines = ["fn main() {", "    let x = 1;", "}"]
        state.asm_mapping = {0: 1, 1: 2}
        assert state.get_source_line_for_asm(0) == "fn main() {"
        assert state.get_source_line_for_asm(1) == "    let x = 1;"

    def test_unmapped_line(self):
        state = AsmViewState(source_lines=["a"], asm_mapping={0: 1})
        assert state.get_source_line_for_asm(5) is None

    def test_out_of_range(self):
        state = AsmViewState(source_lines=["a"], asm_mapping={0: 100, 1: 0})
        assert state.get_source_line_for_asm(0) is None
        assert state.get_source_line_for_asm(1) is None


class TestUpdate:
    def test_update_asm_replaces_previous(self):
        state = AsmViewState()
        first, _ = build_function(["nop"], "a")
        second, _ = build_function(["ret"], "b")
        state.update_asm(first, ["    nop "], {0: 1})
        state.update_asm(second, ["    ret "], {})
        assert state.function.id == "b"
        assert state.asm_lines == ["    ret "]
        assert state.asm_mapping == {}
