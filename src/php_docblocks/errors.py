"""Exception hierarchy for docblock synthesis."""

from pathlib import Path


class DocblockError(Exception):
    """Base exception for all docblock errors."""


class ConfigError(DocblockError):
    """Invalid or missing configuration."""


class ParseError(DocblockError):
    """A source file could not be parsed."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        location = f" on line {line}" if line is not None else ""
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{message}{location}")
        self.path = path
        self.line = line
        self.column = column
