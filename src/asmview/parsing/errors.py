"""
Classification failures. Each one remembers the raw text that failed and,
when known, its index within the listing.
"""
from typing import Optional


class ClassificationError(ValueError):
    description = "Unclassifiable line"

    def __init__(self, raw_line: str, line_index: Optional[int] = None):
        self.raw_line = raw_line
        self.line_index = line_index
        super().__init__(str(self))

    def at(self, line_index: int) -> "ClassificationError":
        """Return a copy of this error tagged with its position in the listing."""
        return type(self)(self.raw_line, line_index)

    def __str__(self) -> str:
        where = f" at line {self.line_index}" if self.line_index is not None else ""
        return f"{self.description}{where}: {self.raw_line!r}"


class MalformedFileDirective(ClassificationError):
    description = "Malformed .file directive"


class MalformedLocDirective(ClassificationError):
    description = "Malformed .loc directive"


class EmptyInstruction(ClassificationError):
    description = "Empty instruction"
