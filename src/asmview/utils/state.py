from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..parsing.errors import ClassificationError
from ..parsing.function import Function


@dataclass
class AsmViewState:
    """
    The single source of truth for the viewer's data.
    """
    listing_path: str = ""
    source_path: str = ""
    source_lines: List[str] = field(default_factory=list)

    # Assembly Data
    function: Optional[Function] = None
    asm_lines: List[str] = field(default_factory=list)
    asm_mapping: Dict[int, int] = field(default_factory=dict)

    # Errors
    diagnostics: List[ClassificationError] = field(default_factory=list)
    error: str = ""
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        return bool(self.error)

    def get_source_line_for_asm(self, asm_idx: int) -> Optional[str]:
        line_num = self.asm_mapping.get(asm_idx)
        if line_num and 0 < line_num <= len(self.source_lines):
            return self.source_lines[line_num - 1]
        return None

    def update_asm(self, function: Function, lines: List[str], mapping: Dict[int, int]):
        self.function = function
        self.asm_lines = lines
        self.asm_mapping = mapping
