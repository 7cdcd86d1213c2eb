from pathlib import Path
from typing import Callable, Optional
from .parsing import build_function, make_demangler, ClassificationError
from .render import Options, render_function, source_line_map
from .utils.config import ConfigManager
from .utils.state import AsmViewState
from .utils.watcher import FileWatcher
import time


class AsmEngine:
    """
    Reads a function listing, builds it, renders it and publishes the
    result into an AsmViewState. Optionally re-runs whenever the listing changes.
    """
    def __init__(
        self,
        listing_file: str,
        options: Optional[Options] = None,
        config: Optional[ConfigManager] = None,
        function_id: Optional[str] = None,
        source_file: Optional[str] = None,
        demangler: Optional[str] = None,
        skip_malformed: Optional[bool] = None,
    ):
        self.config = config if config else ConfigManager()
        self.options = options if options else self.config.options()
        self.state = AsmViewState(listing_path=listing_file, source_path=source_file or "")
        self.function_id = function_id or Path(listing_file).stem
        self.demangle = make_demangler(demangler or self.config.get("demangler", "auto"))
        if skip_malformed is None:
            skip_malformed = bool(self.config.get("skip_malformed", False))
        self.skip_malformed = skip_malformed
        self.watcher = FileWatcher()
        self.on_update_callback: Optional[Callable[[AsmViewState], None]] = None
        self.log_file = self.config.get("log_file", "/tmp/asmview_engine.log")

    def _log(self, msg: str):
        try:
            with open(self.log_file, "a") as f:
                f.write(f"[{time.time()}] {msg}\n")
        except OSError:
            pass

    def start(self):
        self.refresh()
        self.watcher.start_watching(self.state.listing_path, self._on_file_saved)

    def stop(self):
        self.watcher.stop_watching()

    def _on_file_saved(self, path: str):
        self.refresh()

    def set_options(self, options: Options):
        self.options = options
        self.refresh()

    def refresh(self):
        self._log(f"Refreshing {self.state.listing_path} with {self.options}")
        self.state.error = ""
        try:
            with open(self.state.listing_path, "r", encoding="utf-8") as f:
                raw_lines = f.read().splitlines()

            if self.state.source_path:
                with open(self.state.source_path, "r", encoding="utf-8") as f:
                    self.state.source_lines = f.read().splitlines()

            function, diagnostics = build_function(
                raw_lines,
                self.function_id,
                demangle=self.demangle,
                skip_malformed=self.skip_malformed,
            )
            for diag in diagnostics:
                self._log(f"Skipped malformed line: {diag}")

            rendered = render_function(function, self.options)
            mapping = source_line_map(function, self.options)
            self.state.diagnostics = diagnostics
            self.state.update_asm(function, rendered, mapping)
            self._log(f"Rendered {len(rendered)} of {len(function.statements)} statements")

        except (OSError, UnicodeDecodeError, ClassificationError) as e:
            self._log(f"Refresh Error: {e}")
            self.state.error = str(e)

        self.state.last_update = time.time()
        if self.on_update_callback:
            self.on_update_callback(self.state)
