"""
Locating, reading and writing omnisearch settings files.

Settings are plain TOML or JSON documents with a ``general`` table and an
optional ``sites`` table; :class:`~omnisearch.infra.config.ConfigAdapter`
turns them into config dataclasses.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from omnisearch.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

_LOCAL_NAMES = ("settings.toml", "settings.json")


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def _read_toml(path: Path) -> Any:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


_READERS: dict[str, Callable[[Path], Any]] = {
    ".json": _read_json,
    ".toml": _read_toml,
}


def _find_settings_file(user_path: str | Path | None) -> Path | None:
    """
    Pick the settings file to read.

    Lookup order:
        1. ``user_path`` (if given and it exists)
        2. ``settings.toml`` then ``settings.json`` in the working directory
        3. ``SETTING_PATH`` in the per-user config directory
    """
    candidates: list[Path] = []
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if not path.is_file():
            logger.warning("Specified file not found: %s", path)
        candidates.append(path)
    candidates.extend(Path.cwd() / name for name in _LOCAL_NAMES)
    candidates.append(SETTING_PATH)

    for path in candidates:
        if path.is_file():
            return path.resolve()
    return None


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Parse a ``.toml`` or ``.json`` settings file.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            root element is not a table/object.
    """
    ext = path.suffix.lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise ValueError(f"Unsupported config file extension: {ext}")

    data = reader(path)
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load settings from the first file found.

    Raises:
        FileNotFoundError: If no settings file is found.
        ValueError: If the file cannot be parsed.
    """
    path = _find_settings_file(config_path)
    if path is None:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)


def copy_default_config(target: Path) -> None:
    """Copy the bundled sample settings to ``target``."""
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> None:
    """
    Write settings as JSON, by default to the per-user settings file.

    Raises:
        OSError: If writing to disk fails.
    """
    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write settings '%s': %s", output, e)
        raise

    logger.info("Settings saved to: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path = SETTING_PATH
) -> None:
    """
    Install a TOML/JSON settings file as the per-user JSON settings.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If the source file cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(_load_by_extension(source), output_path)
