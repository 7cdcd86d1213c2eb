from .parsing import build_function, classify, Function
from .render import Options, render_function, resolve, should_print, format_statement

__version__ = "0.1.0"
