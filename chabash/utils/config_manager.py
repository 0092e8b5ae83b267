# config_manager.py - JSON config manager

import json
import os

from chabash.errors import ConfigError

DEFAULTS = {
    "data_file": "chabash.dat",
    "bidirectional": True,
    "var_prefix": "CB",
    "max_steps": 1000,          # sampling steps per walk before giving up
    "strict_weighting": False,  # exact proportional sampling instead of the legacy walk
    "seed": None,               # rng seed, None = system randomness
}


class Config:
    def __init__(self, path=None):
        self.path = path
        self.data = dict(DEFAULTS)
        if path:
            self._load()

    def _load(self):
        if not os.path.exists(self.path):
            raise ConfigError(f"config file not found: {self.path}")
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"cannot read config {self.path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"config {self.path} must hold a JSON object")
        for k, v in loaded.items():
            self.set(k, v)

    def save(self, path=None):
        path = path or self.path
        if not path:
            raise ConfigError("no config path to save to")
        with open(path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self):
        for k, v in self.data.items():
            print(f"{k:17} = {v}")

    def set(self, key, val):
        if key not in DEFAULTS:
            raise ConfigError(f"No such option: {key}")
        default = DEFAULTS[key]
        if val is None:
            if default is not None:
                raise ConfigError(f"{key} cannot be null")
            self.data[key] = None
            return
        if isinstance(default, bool) and isinstance(val, str):
            if val.lower() not in ("1", "0", "true", "false", "yes", "no"):
                raise ConfigError(f"bad boolean for {key}: {val!r}")
            val = val.lower() in ("1", "true", "yes")
        kind = int if default is None else type(default)
        try:
            self.data[key] = kind(val)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"bad value for {key}: {val!r}") from e
        if key == "max_steps" and self.data[key] < 1:
            raise ConfigError("max_steps must be >= 1")

    def __getitem__(self, key):
        return self.data[key]
