# src/glipper/core/ignore.py
import logging
from pathlib import PurePosixPath
from typing import Union

import pathspec

from glipper.config import HIDDEN_DIR_PATTERNS
from glipper.models import Config

logger = logging.getLogger(__name__)


def build_skip_spec(config: Config) -> pathspec.PathSpec:
    """
    Compiles the directory skip rules implied by *config* into a PathSpec.
    Only hidden directories are skipped; hidden files are always kept.
    """
    patterns = list(HIDDEN_DIR_PATTERNS) if config.skip_hidden_dirs else []
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def is_dir_skipped(spec: pathspec.PathSpec, rel_path: Union[str, PurePosixPath]) -> bool:
    """Checks a directory path (relative to the root) against the skip rules."""
    rel = PurePosixPath(rel_path).as_posix()
    if rel in ("", "."):
        # The root itself is never skipped.
        return False
    if spec.match_file(rel + "/"):
        logger.debug("Skipping directory: %s", rel)
        return True
    return False
