"""
Unit tests for assembling a Function from raw listing lines.
"""
import dataclasses
import pytest
from asmview.parsing import (
    build_function,
    Function,
    Label,
    Instruction,
    LocDirective,
    SourceFile,
    SourceLocation,
    MalformedLocDirective,
    MalformedFileDirective,
)

LISTING = """\
\t.file\t1 "main.rs"
\t.loc\t1 4 0
_ZN4main3addE:
\tpush\trbp
\t.loc\t1 5 9
\tlea\teax, [rdi + rsi]
\tpop\trbp
\tret
"""


class TestBuildFunction:
    def test_declared_file_and_location(self):
        function, diagnostics = build_function(LISTING.splitlines(), "add")
        assert function.id == "add"
        assert function.file == SourceFile("main.rs", 1)
        assert function.loc == SourceLocation(1, 4, 0)
        assert diagnostics == []

    def test_indentation_stripped(self):
        function, _ = build_function(LISTING.splitlines(), "add")
        label = function.statements[2]
        assert isinstance(label, Label)
        assert label.id == "_ZN4main3addE"

    def test_locations_threaded(self):
        function, _ = build_function(LISTING.splitlines(), "add")
        instrs = [s for s in function.statements if isinstance(s, Instruction)]
        assert [i.location.line for i in instrs] == [4, 5, 5, 5]

    def test_newlines_stripped(self):
        function, _ = build_function(LISTING.splitlines(keepends=True), "add")
        assert len(function.statements) == 8

    def test_statements_before_any_loc(self):
        function, _ = build_function(["LBB0:", "nop", ".loc 1 1"], "f")
        assert function.statements[0].location is None
        assert function.statements[1].location is None
        assert function.loc == SourceLocation(1, 1, 0)

    def test_first_declarations_win(self):
        lines = ['.file 2 "a.rs"', '.file 1 "b.rs"', ".loc 2 1", ".loc 1 9"]
        function, _ = build_function(lines, "f")
        assert function.file == SourceFile("a.rs", 2)
        assert function.loc == SourceLocation(2, 1, 0)

    def test_unmatched_file_index_is_not_an_error(self):
        function, diagnostics = build_function([".loc 7 3", "ret"], "f")
        assert diagnostics == []
        assert function.file is None
        assert function.statements[1].location.file_index == 7

    def test_blank_lines_skipped(self):
        function, _ = build_function(["nop", "", "   ", "ret"], "f")
        assert [s.mnemonic for s in function.statements] == ["nop", "ret"]

    def test_empty_listing(self):
        function, diagnostics = build_function([], "f")
        assert function == Function(id="f")
        assert diagnostics == []

    def test_function_is_immutable(self):
        function, _ = build_function(["ret"], "f")
        assert isinstance(function.statements, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            function.id = "g"
        with pytest.raises(dataclasses.FrozenInstanceError):
            function.statements[0].mnemonic = "nop"


class TestFiles:
    def test_files_by_index(self):
        lines = ['.file 1 "main.rs"', '.file 5 "lib.rs"', "ret"]
        function, _ = build_function(lines, "f")
        assert function.files == {1: SourceFile("main.rs", 1), 5: SourceFile("lib.rs", 5)}
        assert function.file_for(5).path == "lib.rs"
        assert function.file_for(2) is None


class TestMalformedLines:
    LINES = ["push rbp", ".loc 1", "ret", '.file one "x.rs"', "nop"]

    def test_strict_raises_with_position(self):
        with pytest.raises(MalformedLocDirective) as exc_info:
            build_function(self.LINES, "f")
        assert exc_info.value.line_index == 1
        assert exc_info.value.raw_line == ".loc 1"

    def test_position_counts_blank_lines(self):
        with pytest.raises(MalformedLocDirective) as exc_info:
            build_function(["", "nop", ".loc x y"], "f")
        assert exc_info.value.line_index == 2

    def test_skip_records_diagnostics(self):
        function, diagnostics = build_function(self.LINES, "f", skip_malformed=True)
        assert [s.mnemonic for s in function.statements] == ["push", "ret", "nop"]
        assert [type(d) for d in diagnostics] == [MalformedLocDirective, MalformedFileDirective]
        assert [d.line_index for d in diagnostics] == [1, 3]

    def test_skipped_loc_does_not_change_location(self):
        lines = [".loc 1 3", ".loc 1 x", "ret"]
        function, _ = build_function(lines, "f", skip_malformed=True)
        assert function.statements[-1].location == SourceLocation(1, 3, 0)
        assert sum(isinstance(s, LocDirective) for s in function.statements) == 1


class TestDemanglerInjection:
    def test_demangler_used_for_calls(self):
        seen = []

        def stub(symbol):
            seen.append(symbol)
            return "foo::bar"

        function, _ = build_function(["call _ZN3foo3barE", "jmp _ZN3foo3barE"], "f", demangle=stub)
        assert function.statements[0].operands == ("foo::bar",)
        assert function.statements[1].operands == ("_ZN3foo3barE",)
        assert seen == ["_ZN3foo3barE"]
