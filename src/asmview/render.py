"""
Filtering and rendering of a built Function under display options.
Stateless: the same function and options always give the same text.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from .parsing.function import Function
from .parsing.location import SourceFile
from .parsing.statements import Statement


@dataclass(frozen=True)
class Options:
    directives: bool = False
    comments: bool = False
    verbose: bool = False


def should_print(statement: Statement, options: Options) -> bool:
    return statement.should_print(options)


def format_statement(statement: Statement, options: Options) -> str:
    return statement.format(options)


def resolve(statement: Statement, file: SourceFile) -> Optional[int]:
    """
    Source line of `statement` within `file`, or None when the statement has
    no location or its location belongs to another compilation unit
    (e.g. code inlined from a header).
    """
    loc = statement.location
    if loc is None or loc.file_index != file.index:
        return None
    return loc.line


def render_function(function: Function, options: Options) -> List[str]:
    return [
        format_statement(s, options)
        for s in function.statements
        if should_print(s, options)
    ]


def source_line_map(
    function: Function, options: Options, file: Optional[SourceFile] = None
) -> Dict[int, int]:
    """
    { rendered_line_index: source_line } for the lines `render_function`
    produces. Defaults to the function's declared file.
    """
    file = file or function.file
    mapping: Dict[int, int] = {}
    if file is None:
        return mapping

    visible = [s for s in function.statements if should_print(s, options)]
    for idx, stmt in enumerate(visible):
        line = resolve(stmt, file)
        if line is not None:
            mapping[idx] = line
    return mapping
