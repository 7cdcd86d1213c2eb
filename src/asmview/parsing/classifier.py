"""
Turns one raw listing line into exactly one typed statement.

Precedence: label, directive (.file / .loc / anything else), comment,
instruction. The only state is the location currently in effect, which
the caller threads from one call to the next.
"""
import re
from typing import Callable, Optional

from .errors import EmptyInstruction, MalformedFileDirective, MalformedLocDirective
from .location import SourceFile, SourceLocation
from .statements import (
    Comment,
    FileDirective,
    GenericDirective,
    Instruction,
    Label,
    LocDirective,
    Statement,
)

Demangler = Callable[[str], str]

RE_UINT = re.compile(r"[0-9]+")


def identity(symbol: str) -> str:
    return symbol


def _uint(token: str) -> Optional[int]:
    if RE_UINT.fullmatch(token):
        return int(token)
    return None


def parse_file_directive(line: str) -> SourceFile:
    """
    `.file <index> "<path>" ...` - anything after the closing quote is ignored.
    """
    quoted = line.split('"')
    tokens = line.split()
    if len(quoted) < 3 or len(tokens) < 2:
        raise MalformedFileDirective(line)
    index = _uint(tokens[1])
    if index is None:
        raise MalformedFileDirective(line)
    return SourceFile(path=quoted[1], index=index)


def parse_loc_directive(line: str) -> SourceLocation:
    """`.loc <file_index> <line> [<column>]`, column defaulting to 0."""
    tokens = line.split()
    if len(tokens) < 3:
        raise MalformedLocDirective(line)
    numbers = [_uint(t) for t in tokens[1:4]]
    if any(n is None for n in numbers):
        raise MalformedLocDirective(line)
    column = numbers[2] if len(numbers) > 2 else 0
    return SourceLocation(file_index=numbers[0], line=numbers[1], column=column)


def classify(
    raw_line: str,
    current_location: Optional[SourceLocation] = None,
    *,
    demangle: Demangler = identity,
    line_index: Optional[int] = None,
) -> Statement:
    """
    Classify a single line (already stripped of its newline).

    Raises MalformedFileDirective, MalformedLocDirective or EmptyInstruction,
    tagged with `line_index` when one is given.
    """
    try:
        return _classify(raw_line, current_location, demangle)
    except (MalformedFileDirective, MalformedLocDirective, EmptyInstruction) as e:
        if line_index is None:
            raise
        raise e.at(line_index) from None


def _classify(raw_line, current_location, demangle):
    if raw_line.endswith(":"):
        return Label(id=raw_line[:-1], loc=current_location)

    if raw_line.startswith("."):
        if raw_line.startswith(".file"):
            return FileDirective(parse_file_directive(raw_line))
        if raw_line.startswith(".loc"):
            return LocDirective(parse_loc_directive(raw_line))
        return GenericDirective(raw_line)

    if raw_line.startswith(";"):
        return Comment(raw_line)

    tokens = raw_line.split()
    if not tokens:
        raise EmptyInstruction(raw_line)
    mnemonic, operands = tokens[0], tokens[1:]
    # Whitespace split: "[rbp - 8]" becomes three operands
    if mnemonic == "call" and operands:
        operands[0] = demangle(operands[0])
    return Instruction(mnemonic=mnemonic, operands=tuple(operands), loc=current_location)
