# src/glipper/core/scanner.py
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from glipper.errors import TraversalError
from glipper.models import FileCandidate

logger = logging.getLogger(__name__)

SkipPredicate = Callable[[str], bool]


def display_safe(text: str) -> str:
    """Replaces undecodable file name bytes so the text can be encoded as UTF-8."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def relative_display(path: Path, root: Path) -> str:
    """Path relative to *root* for display, or the full path if that fails."""
    try:
        return display_safe(path.relative_to(root).as_posix())
    except ValueError:
        return display_safe(str(path))


def _list_dir(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise TraversalError(f"Could not read directory '{directory}': {e}") from e


def walk_tree(root: Path, skip_dir: Optional[SkipPredicate] = None) -> Iterator[FileCandidate]:
    """
    Lazily walks *root* depth-first, visiting the entries of each directory
    in name order and descending into subdirectories at their sorted position.

    *skip_dir* receives each directory's path relative to *root* and returns
    True to prune that whole subtree. Symlinked directories are never entered.
    Raises TraversalError when a directory cannot be listed.
    """
    root = Path(root)
    yield from _walk_dir(root, root, skip_dir)


def _walk_dir(directory: Path, root: Path, skip_dir: Optional[SkipPredicate]) -> Iterator[FileCandidate]:
    for entry in _list_dir(directory):
        entry_path = directory / entry.name
        rel_path = relative_display(entry_path, root)

        try:
            is_real_dir = entry.is_dir(follow_symlinks=False)
            is_linked_dir = not is_real_dir and entry.is_symlink() and entry.is_dir()
        except OSError:
            # Let the read step report it.
            is_real_dir = is_linked_dir = False

        if is_real_dir:
            if skip_dir is not None and skip_dir(rel_path):
                continue
            yield from _walk_dir(entry_path, root, skip_dir)
        elif is_linked_dir:
            logger.debug("Skipping symlinked directory: %s", rel_path)
        else:
            yield FileCandidate(path=entry_path, rel_path=rel_path)
