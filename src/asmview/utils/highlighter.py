import re
from typing import Dict, List, Optional

from rich.text import Text

REGISTERS = re.compile(
    r"\b("
    r"r[abcd]x|r[sd]i|r[bs]p|r(?:8|9|1[0-5])[dwb]?"
    r"|e[abcd]x|e[sd]i|e[bs]p"
    r"|[abcd][hl]|[abcd]x|[sd]il?|[bs]pl?"
    r"|xmm[0-9]+|ymm[0-9]+|zmm[0-9]+"
    r"|[wx](?:[12]?[0-9]|3[01])|sp|lr|fp"
    r")\b",
    re.IGNORECASE,
)

SIZE_KEYWORDS = re.compile(
    r"\b(DWORD|QWORD|WORD|BYTE|PTR)\b",
    re.IGNORECASE,
)

NUMBERS = re.compile(
    r"\b(0x[0-9a-fA-F]+|0b[01]+|[0-9]+)\b",
)

RE_RLOC = re.compile(r"\s\|\srloc:.*$")


def highlight_asm_line(line: str) -> Text:
    """
    Colour one rendered statement.

      - Comments          -> dim grey
      - Labels            -> bold yellow
      - Directives        -> green
      - Mnemonics         -> blue
      - Size keywords     -> magenta
      - Numeric literals  -> cyan
      - Registers         -> bold red
      - `| rloc: ...`     -> dim
    """
    stripped = line.lstrip()
    if stripped.startswith(";") or stripped.startswith("#"):
        return Text(line, style="dim grey")
    if stripped.endswith(":"):
        return Text(line, style="bold yellow")
    if stripped.startswith("."):
        return Text(line, style="green")

    text = Text(line)
    suffix = RE_RLOC.search(line)
    body_end = suffix.start() if suffix else len(line)
    body = line[:body_end]

    indent = len(body) - len(body.lstrip())
    mnemonic_end = indent + len(body.lstrip().split(" ", 1)[0])
    text.stylize("blue", indent, mnemonic_end)

    operands = body[mnemonic_end:]
    for pattern, style in ((SIZE_KEYWORDS, "magenta"), (NUMBERS, "cyan"), (REGISTERS, "bold red")):
        for m in pattern.finditer(operands):
            text.stylize(style, mnemonic_end + m.start(), mnemonic_end + m.end())

    if suffix:
        text.stylize("dim", suffix.start(), len(line))
    return text


def build_listing(
    asm_lines: List[str],
    mapping: Optional[Dict[int, int]] = None,
    source_lines: Optional[List[str]] = None,
) -> Text:
    """
    Highlighted listing. When a mapping is given, each mapped line gets a
    `# <line>: <source text>` annotation so the reader can see where it came from.

    Args:
        asm_lines: output of render_function.
        mapping: { rendered_line_index: source_line } from source_line_map.
        source_lines: the source file split by lines.
    """
    mapping = mapping or {}
    source_lines = source_lines or []
    result = Text()

    for i, line in enumerate(asm_lines):
        result.append_text(highlight_asm_line(line))

        src_line = mapping.get(i)
        if src_line is not None:
            note = f"  # {src_line}"
            if 0 < src_line <= len(source_lines):
                note += f": {source_lines[src_line - 1].strip()}"
            result.append(note, style="italic #94bfc1")

        if i + 1 < len(asm_lines):
            result.append("\n")

    return result
