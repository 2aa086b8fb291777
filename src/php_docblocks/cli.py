"""CLI entry point for php-docblocks."""

import os
from pathlib import Path

import click
from loguru import logger

from .config import DocblockConfig
from .errors import ConfigError
from .runner import DocblockRunner

log = logger.bind(stage="cli")


def _find_config_file() -> Path | None:
    """Look for .env in cwd."""
    candidate = Path.cwd() / ".env"
    if candidate.is_file():
        return candidate
    return None


def _load_env_file(env_file: Path) -> None:
    """Load a shell-style .env file into os.environ (without overriding)."""
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        # Strip quotes
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        # Don't override existing env vars (CLI > env > file)
        if key not in os.environ:
            os.environ[key] = value


@click.command()
@click.argument("root", type=click.Path(file_okay=False), required=False)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
def main(root: str | None, verbose: bool, config_file: str | None) -> None:
    """Add docblocks to undocumented PHP methods, rewriting files in place.

    ROOT defaults to the configured root directory (src/Controller).
    """
    # Load .env into environment before DocblockConfig reads env vars
    env_file = Path(config_file) if config_file else _find_config_file()
    if env_file and env_file.is_file():
        _load_env_file(env_file)
        log.debug(f"Loaded env from {env_file}")

    config_kwargs: dict[str, bool | str] = {"verbose": verbose}
    if root is not None:
        config_kwargs["root_dir"] = root

    config = DocblockConfig(_env_file=None, **config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()

    log.debug(
        f"Starting run: root={config.root_dir} pattern={config.file_pattern} "
        f"default_style={config.default_style}"
    )
    try:
        DocblockRunner(config).run()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
