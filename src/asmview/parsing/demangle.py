"""
Demangling capabilities for call targets.

A capability is any `str -> str` callable that never fails: when it cannot
decode a symbol it hands the symbol back unchanged. The external filters
(c++filt, rustfilt, llvm-cxxfilt) are used one symbol at a time and cached.
"""
import re
import shutil
import subprocess
from typing import Callable, Dict, Optional

from .classifier import identity

# Rust appends ::h<16 hex digits> hash suffix to mangled symbol names
RE_RUST_HASH = re.compile(r"::h[0-9a-f]{16}")

# Preference order for `auto`
AUTO_TOOLS = ("rustfilt", "llvm-cxxfilt", "c++filt")
KNOWN_TOOLS = AUTO_TOOLS


def simplify_rust_symbols(text: str) -> str:
    """
    Strip hash suffixes and verbose stdlib paths from demangled Rust symbols.
    """
    text = RE_RUST_HASH.sub("", text)

    text = text.replace("core::ops::function::FnOnce::", "FnOnce::")
    text = text.replace("core::ops::function::FnMut::", "FnMut::")
    text = text.replace("core::ops::function::Fn::", "Fn::")
    text = text.replace("core::fmt::", "fmt::")
    text = text.replace("alloc::string::String", "String")
    text = text.replace("alloc::vec::Vec", "Vec")

    return text


class ToolDemangler:
    """
    Pipes a symbol through an external demangler program.
    Falls back to the original symbol if the tool is missing or misbehaves.
    """

    def __init__(self, tool: str, simplify: bool = False, timeout: float = 5.0):
        self.tool = tool
        self.tool_path: Optional[str] = shutil.which(tool)
        self.simplify = simplify
        self.timeout = timeout
        self._cache: Dict[str, str] = {}

    @property
    def available(self) -> bool:
        return self.tool_path is not None

    def __call__(self, symbol: str) -> str:
        if symbol not in self._cache:
            self._cache[symbol] = self._run(symbol)
        return self._cache[symbol]

    def _run(self, symbol: str) -> str:
        if not self.tool_path:
            return symbol

        try:
            process = subprocess.Popen(
                [self.tool_path],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except (OSError, subprocess.SubprocessError):
            return symbol

        try:
            stdout, _stderr = process.communicate(input=symbol + "\n", timeout=self.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            return symbol
        except (OSError, subprocess.SubprocessError):
            return symbol

        if process.returncode != 0:
            return symbol
        result = stdout.strip()
        if not result:
            return symbol
        return simplify_rust_symbols(result) if self.simplify else result


def make_demangler(name: str = "auto") -> Callable[[str], str]:
    """
    Map a configuration name to a demangling capability.
    `none` disables demangling, `auto` picks the first tool installed.
    """
    if name == "none":
        return identity
    if name == "auto":
        for tool in AUTO_TOOLS:
            if shutil.which(tool):
                return ToolDemangler(tool, simplify=(tool != "c++filt"))
        return identity
    if name in KNOWN_TOOLS:
        return ToolDemangler(name, simplify=(name != "c++filt"))
    raise ValueError(f"Unknown demangler '{name}'. Choose from: none, auto, {', '.join(KNOWN_TOOLS)}")
