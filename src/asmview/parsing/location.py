"""
Location model: which compilation-unit file a statement came from,
and where inside it. Plain values, compared structurally.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SourceFile:
    """A `.file` entry. `index` is whatever number the compiler assigned."""
    path: str
    index: int

    def format(self) -> str:
        return f'.file {self.index} "{self.path}"'


@dataclass(frozen=True)
class SourceLocation:
    file_index: int
    line: int
    column: int = 0

    def format(self) -> str:
        return f".loc {self.file_index} {self.line} {self.column}"

    def as_pair(self) -> Tuple[int, int]:
        return (self.file_index, self.line)
