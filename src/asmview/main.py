import sys
import os
import time
import argparse
from rich.console import Console
from .engine import AsmEngine
from .render import Options
from .utils.config import ConfigManager
from .utils.highlighter import build_listing
from .utils.state import AsmViewState


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="asmview: filter and pretty-print a function's assembly listing")
    parser.add_argument("file", nargs="?", help="Assembly listing of a single function")
    parser.add_argument("--function", dest="function_id", help="Function name (defaults to the listing's file stem)")
    parser.add_argument("--directives", action="store_true", default=None, help="Show assembler directives")
    parser.add_argument("--comments", action="store_true", default=None, help="Show comments")
    parser.add_argument("--verbose", action="store_true", default=None, help="Append each instruction's source location")
    parser.add_argument("--demangler", help="none, auto, c++filt, rustfilt or llvm-cxxfilt")
    parser.add_argument("--skip-malformed", action="store_true", default=None, help="Skip lines that fail to parse instead of aborting")
    parser.add_argument("--source-file", help="Source file used to annotate instructions")
    parser.add_argument("--watch", action="store_true", help="Re-render whenever the listing is saved")
    parser.add_argument("--no-color", action="store_true", help="Print plain text")
    return parser


def _resolve_options(args, config: ConfigManager) -> Options:
    """CLI flags override the saved configuration for this run only."""
    base = config.options()
    return Options(
        directives=base.directives if args.directives is None else args.directives,
        comments=base.comments if args.comments is None else args.comments,
        verbose=base.verbose if args.verbose is None else args.verbose,
    )


def _print_state(console: Console, state: AsmViewState):
    if state.error:
        console.print(f"Error: {state.error}", style="bold red", markup=False)
        return
    for diag in state.diagnostics:
        console.print(f"Warning: skipped {diag}", style="yellow", markup=False)
    mapping = state.asm_mapping if state.source_lines else None
    console.print(build_listing(state.asm_lines, mapping, state.source_lines))


def run():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.file:
        print("Error: No listing file specified.")
        print("Usage: asmview <listing.s>")
        sys.exit(1)

    abs_path = os.path.abspath(args.file)
    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}")
        sys.exit(1)

    config = ConfigManager()
    try:
        engine = AsmEngine(
            abs_path,
            options=_resolve_options(args, config),
            config=config,
            function_id=args.function_id,
            source_file=os.path.abspath(args.source_file) if args.source_file else None,
            demangler=args.demangler,
            skip_malformed=args.skip_malformed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    console = Console(no_color=args.no_color, highlight=False)

    if not args.watch:
        engine.refresh()
        _print_state(console, engine.state)
        sys.exit(1 if engine.state.has_errors else 0)

    def on_update(state: AsmViewState):
        console.clear()
        _print_state(console, state)

    engine.on_update_callback = on_update
    try:
        engine.start()
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()


if __name__ == "__main__":
    run()
