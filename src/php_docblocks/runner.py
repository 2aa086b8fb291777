"""Traversal driver -- finds PHP files and rewrites each one in place."""

from __future__ import annotations

import copy
import os
import re
from pathlib import Path

import click
from loguru import logger

from .config import DocblockConfig
from .errors import ConfigError, ParseError
from .models import DEFAULT_FILE_PATTERN, DefaultStyle, RunResult
from .parser import parse_source
from .printer import print_format_preserving
from .synth import synthesize

log = logger.bind(stage="runner")


def find_source_files(
    root: Path,
    pattern: re.Pattern[str] | str = DEFAULT_FILE_PATTERN,
) -> list[Path]:
    """Find files below root whose name matches pattern.

    String patterns are compiled case-insensitively. Every directory is
    descended into; there is no exclusion list.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    matches: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            if pattern.match(name):
                matches.append(Path(dirpath) / name)
    return sorted(matches)


def process_file(
    path: Path,
    default_style: DefaultStyle = DefaultStyle.SOURCE,
) -> bool:
    """Add docblocks to one file. Returns True if the file was rewritten.

    ParseError propagates before anything is written. I/O and decoding
    errors are not caught here.
    """
    source = path.read_bytes()
    source.decode("utf-8")  # non-UTF-8 input ends the run

    parsed = parse_source(source, path=path)

    # Synthesize on a copy so the originals stay available as the baseline
    new_methods = copy.deepcopy(parsed.methods)
    added = synthesize(new_methods, default_style)
    if not added:
        log.debug(f"No undocumented methods in {path}")
        return False

    new_source = print_format_preserving(new_methods, parsed.methods, source)
    if new_source == source:
        return False

    # Overwrite through the path so mode bits and symlinks survive
    path.write_bytes(new_source)
    log.debug(f"Added {added} docblocks to {path}")
    return True


class DocblockRunner:
    """Runs docblock synthesis over every matching file under a root."""

    def __init__(self, config: DocblockConfig) -> None:
        self.config = config

    def run(self, root: Path | None = None) -> RunResult:
        """Process every matching file, isolating parse failures per file.

        A file that fails to parse is reported on stdout and left
        untouched; any other error ends the run.
        """
        root = root or self.config.root_dir
        if not root.is_dir():
            raise ConfigError(f"Root directory not found: {root}")

        files = find_source_files(root, self.config.file_regex)
        log.debug(f"Found {len(files)} files in {root}")

        result = RunResult(total=len(files))
        for path in files:
            try:
                changed = process_file(path, self.config.default_style)
            except ParseError as e:
                result.failed += 1
                click.echo(f"Parse Error: {e}")
                log.warning(f"Skipped {path}: {e}")
                continue

            if changed:
                result.updated += 1
            else:
                result.unchanged += 1

        log.info(
            f"Processed {result.total} files: {result.updated} updated, "
            f"{result.unchanged} unchanged, {result.failed} failed"
        )
        return result
