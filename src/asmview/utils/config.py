import json
from pathlib import Path
from typing import Any, Dict

from ..render import Options

DEFAULT_CONFIG: Dict[str, Any] = {
    "directives": False,
    "comments": False,
    "verbose": False,
    "demangler": "auto",
    "skip_malformed": False,
    "log_file": "/tmp/asmview_engine.log",
}


class ConfigManager:
    """
    Persistent user preferences in ~/.asmview/config.json.
    Values found on disk are merged over DEFAULT_CONFIG.
    """

    def __init__(self):
        self.config_dir = Path.home() / ".asmview"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = DEFAULT_CONFIG.copy()
        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError):
            # Corrupt or unreadable file: keep defaults
            return config

        if isinstance(user_config, dict):
            config.update(user_config)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()

    def options(self) -> Options:
        return Options(
            directives=bool(self.get("directives", False)),
            comments=bool(self.get("comments", False)),
            verbose=bool(self.get("verbose", False)),
        )
