# chabash/errors.py


class ChabashError(Exception):
    """Base error for the package."""


class ModelStoreError(ChabashError):
    """Persisted graph file could not be parsed."""

    def __init__(self, path, lineno: int, line: str) -> None:
        super().__init__(f"{path}:{lineno}: cannot parse {line!r}")
        self.path = path
        self.lineno = lineno
        self.line = line


class ConfigError(ChabashError):
    """Bad configuration file or value."""
