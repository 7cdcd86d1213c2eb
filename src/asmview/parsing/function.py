"""
A single function's listing, assembled front-to-back from raw lines.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .classifier import Demangler, classify, identity
from .errors import ClassificationError
from .location import SourceFile, SourceLocation
from .statements import FileDirective, LocDirective, Statement


@dataclass(frozen=True)
class Function:
    id: str
    file: Optional[SourceFile] = None
    loc: Optional[SourceLocation] = None
    statements: Tuple[Statement, ...] = field(default_factory=tuple)

    @property
    def files(self) -> Dict[int, SourceFile]:
        """Every `.file` declared in the listing, keyed by index (last one wins)."""
        return {
            s.file.index: s.file
            for s in self.statements
            if isinstance(s, FileDirective)
        }

    def file_for(self, index: int) -> Optional[SourceFile]:
        return self.files.get(index)


class BuildResult(NamedTuple):
    function: Function
    diagnostics: List[ClassificationError]


def build_function(
    lines: Iterable[str],
    function_id: str,
    *,
    demangle: Demangler = identity,
    skip_malformed: bool = False,
) -> BuildResult:
    """
    Classify every line in order, threading the most recent `.loc` into
    the statements that follow it.

    Blank lines are skipped; line indices still count them.

    Strict by default: the first malformed line raises. With
    `skip_malformed`, bad lines are dropped and returned as diagnostics.
    """
    statements: List[Statement] = []
    diagnostics: List[ClassificationError] = []
    declared_file = None
    declared_loc = None
    current = None

    for idx, raw in enumerate(lines):
        line = raw.rstrip("\n").strip()
        if not line:
            continue
        try:
            stmt = classify(line, current, demangle=demangle, line_index=idx)
        except ClassificationError as e:
            if not skip_malformed:
                raise
            diagnostics.append(e)
            continue

        if isinstance(stmt, LocDirective):
            current = stmt.loc
            if declared_loc is None:
                declared_loc = stmt.loc
        elif isinstance(stmt, FileDirective) and declared_file is None:
            declared_file = stmt.file
        statements.append(stmt)

    function = Function(
        id=function_id,
        file=declared_file,
        loc=declared_loc,
        statements=tuple(statements),
    )
    return BuildResult(function, diagnostics)
