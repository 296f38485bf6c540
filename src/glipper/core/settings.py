# src/glipper/core/settings.py
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from glipper.config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, TIMESTAMP_FORMAT
from glipper.errors import ConfigFileError
from glipper.models import Config

logger = logging.getLogger(__name__)

_BOOL_VALUES = {"true": True, "false": False}


def default_config_path() -> Path:
    """
    Returns ~/.config/glipper/.glipper.conf, creating the directory.
    Falls back to ~/.glipper.conf if the directory cannot be created, and to
    ./.glipper.conf if there is no home directory.
    """
    try:
        home_dir = Path.home()
    except RuntimeError:
        return Path(CONFIG_FILE_NAME)

    config_dir = home_dir / ".config" / CONFIG_DIR_NAME
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create config directory: %s", e)
        return home_dir / CONFIG_FILE_NAME

    return config_dir / CONFIG_FILE_NAME


def parse_config(lines: Iterable[str], base: Optional[Config] = None) -> Config:
    """
    Parses key=value lines on top of *base* (defaults if omitted).
    Comments, unknown keys and malformed values are ignored.
    """
    values = {}
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        key, sep, value = stripped.partition("=")
        if not sep:
            logger.debug("Ignoring malformed config line: %r", stripped)
            continue
        key, value = key.strip(), value.strip()

        if key == "max_clipboard_size":
            try:
                size = int(value)
            except ValueError:
                logger.debug("Ignoring invalid max_clipboard_size: %r", value)
                continue
            if size > 0:
                values["max_output_size"] = size
            else:
                logger.debug("Ignoring non-positive max_clipboard_size: %d", size)
        elif key in ("skip_binary_files", "skip_hidden_dirs"):
            if value in _BOOL_VALUES:
                values[key] = _BOOL_VALUES[value]
            else:
                logger.debug("Ignoring invalid %s: %r", key, value)
        else:
            logger.debug("Ignoring unknown config key: %s", key)

    return (base or Config()).with_overrides(**values)


def render_config(config: Config, generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now()
    return (
        "# Glipper configuration file\n"
        f"# Generated: {generated_at.strftime(TIMESTAMP_FORMAT)}\n"
        "# Format: key=value\n"
        "\n"
        f"max_clipboard_size={config.max_output_size}\n"
        f"skip_binary_files={str(config.skip_binary_files).lower()}\n"
        f"skip_hidden_dirs={str(config.skip_hidden_dirs).lower()}\n"
    )


def save_config(config: Config, path: Path) -> None:
    """Writes *config* to *path*. Raises ConfigFileError on failure."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(render_config(config))
    except OSError as e:
        raise ConfigFileError(f"Could not write config file '{path}': {e}") from e


def load_config(path: Path) -> Config:
    """
    Loads the config file at *path*.
    1. If missing, write the defaults there and return them.
    2. If unreadable, warn and return the defaults.
    """
    config = Config()

    if not path.exists():
        try:
            save_config(config, path)
            logger.info("Created default configuration file at: %s", path)
        except ConfigFileError as e:
            logger.warning("%s", e)
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error loading config file '%s': %s. Using default settings.", path, e)
        return config

    return parse_config(lines, base=config)
