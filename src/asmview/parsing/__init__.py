from .location import SourceFile, SourceLocation
from .statements import (
    Statement,
    Label,
    Directive,
    FileDirective,
    LocDirective,
    GenericDirective,
    Comment,
    Instruction,
)
from .errors import ClassificationError, MalformedFileDirective, MalformedLocDirective, EmptyInstruction
from .classifier import classify, identity
from .function import Function, BuildResult, build_function
from .demangle import ToolDemangler, make_demangler, simplify_rust_symbols
