"""
Typed statements of a function listing.

Every variant answers the same three questions: where did it come from
(`location`), should it be shown (`should_print`), and how (`format`).
`options` is anything with `directives`, `comments` and `verbose` flags.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .location import SourceFile, SourceLocation

# Exception landing pads, temporaries and function-end markers
HIDDEN_LABEL_PREFIXES = ("Lcfi", "Ltmp", "Lfunc_end")


class Statement:
    """Base of the four statement kinds."""

    @property
    def location(self) -> Optional[SourceLocation]:
        return None

    def should_print(self, options) -> bool:
        raise NotImplementedError

    def format(self, options) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Label(Statement):
    id: str
    loc: Optional[SourceLocation] = None

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.loc

    def should_print(self, options) -> bool:
        return not self.id.startswith(HIDDEN_LABEL_PREFIXES)

    def format(self, options) -> str:
        return f"  {self.id}:"


class Directive(Statement):
    """Assembler pseudo-ops. Shown only when directives are enabled."""

    def should_print(self, options) -> bool:
        return bool(options.directives)


@dataclass(frozen=True)
class FileDirective(Directive):
    file: SourceFile

    def format(self, options) -> str:
        return self.file.format()


@dataclass(frozen=True)
class LocDirective(Directive):
    """
    Defines the location inherited by the statements that follow it.
    It carries no attached location of its own.
    """
    loc: SourceLocation

    def format(self, options) -> str:
        return self.loc.format()


@dataclass(frozen=True)
class GenericDirective(Directive):
    raw: str

    def format(self, options) -> str:
        return self.raw


@dataclass(frozen=True)
class Comment(Statement):
    text: str

    def should_print(self, options) -> bool:
        return bool(options.comments)

    def format(self, options) -> str:
        return f"  {self.text}"


@dataclass(frozen=True)
class Instruction(Statement):
    mnemonic: str
    operands: Tuple[str, ...] = ()
    loc: Optional[SourceLocation] = None

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.loc

    def should_print(self, options) -> bool:
        return True

    def format(self, options) -> str:
        text = f"    {self.mnemonic} {' '.join(self.operands)}"
        if options.verbose:
            rloc = self.loc.as_pair() if self.loc is not None else None
            text += f" | rloc: {rloc}"
        return text
