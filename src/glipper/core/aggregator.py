# src/glipper/core/aggregator.py
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from glipper.config import (
    BINARY_PLACEHOLDER,
    FILE_HEADER,
    HEADER_TITLE,
    MAX_FILE_SIZE,
    SIZE_LIMIT_MARKER,
    TIMESTAMP_FORMAT,
)
from glipper.core.classify import decode_text, is_text_content
from glipper.core.ignore import build_skip_spec, is_dir_skipped
from glipper.core.scanner import display_safe, walk_tree
from glipper.errors import InvalidRootError
from glipper.models import AggregationResult, Config, FileCandidate

logger = logging.getLogger(__name__)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _clip(text: str, limit: int) -> str:
    """Cuts *text* to at most *limit* UTF-8 bytes without splitting a character."""
    return text.encode("utf-8")[:limit].decode("utf-8", errors="ignore")


def format_header(root: Union[str, Path], generated_at: datetime) -> str:
    return (
        f"{HEADER_TITLE}\n"
        f"# Generated: {generated_at.strftime(TIMESTAMP_FORMAT)}\n"
        f"# Source: {display_safe(str(root))}\n\n"
    )


def format_text_entry(rel_path: str, content: str) -> str:
    return FILE_HEADER.format(path=rel_path) + f"```\n{content}\n```\n\n"


def format_binary_entry(rel_path: str) -> str:
    return FILE_HEADER.format(path=rel_path) + BINARY_PLACEHOLDER + "\n"


class OutputBuffer:
    """
    Accumulates output under a byte budget.

    Every append keeps room for the size limit marker, so the marker can
    always be written when the first entry fails to fit. After that the
    buffer is latched and accepts nothing more.
    """

    def __init__(self, limit: int):
        self.limit = limit
        self.size = 0
        self.limit_reached = False
        self._parts: List[str] = []
        self._marker_size = _byte_len(SIZE_LIMIT_MARKER)

    def _write(self, text: str, size: int) -> None:
        self._parts.append(text)
        self.size += size

    def start(self, header: str) -> None:
        header_size = _byte_len(header)
        if header_size + self._marker_size > self.limit:
            clipped = _clip(header + SIZE_LIMIT_MARKER, self.limit)
            self._write(clipped, _byte_len(clipped))
            self.limit_reached = True
            return
        self._write(header, header_size)

    def append(self, entry: str) -> bool:
        """Appends *entry* if it fits, otherwise writes the marker and latches."""
        if self.limit_reached:
            return False
        entry_size = _byte_len(entry)
        if self.size + entry_size + self._marker_size > self.limit:
            self._write(SIZE_LIMIT_MARKER, self._marker_size)
            self.limit_reached = True
            return False
        self._write(entry, entry_size)
        return True

    def getvalue(self) -> str:
        return "".join(self._parts)


@dataclass
class RunCounts:
    """Tallies for one aggregation run."""
    file_count: int = 0
    binary_count: int = 0
    skipped_binary: int = 0
    skipped_large: int = 0
    unreadable: int = 0


class Aggregator:
    def __init__(self, config: Config):
        self.config = config
        self.skip_spec = build_skip_spec(config)

    def _read(self, candidate: FileCandidate, counts: RunCounts) -> Optional[bytes]:
        """Reads a candidate, or returns None if it is oversized or unreadable."""
        try:
            size = candidate.path.stat().st_size
        except OSError as e:
            logger.warning("Failed to read file '%s': %s", candidate.path, e)
            counts.unreadable += 1
            return None

        if size > MAX_FILE_SIZE:
            logger.info("Skipping large file: %s (%.2f MB)", candidate.path, size / (1024 * 1024))
            counts.skipped_large += 1
            return None

        try:
            return candidate.path.read_bytes()
        except OSError as e:
            logger.warning("Failed to read file '%s': %s", candidate.path, e)
            counts.unreadable += 1
            return None

    def _entry_for(self, candidate: FileCandidate, data: bytes, counts: RunCounts) -> Tuple[Optional[str], bool]:
        """Returns the formatted entry (None if omitted) and whether it is text."""
        if is_text_content(data):
            return format_text_entry(candidate.rel_path, decode_text(data)), True
        if self.config.skip_binary_files:
            logger.debug("Skipping binary file: %s", candidate.rel_path)
            counts.skipped_binary += 1
            return None, False
        return format_binary_entry(candidate.rel_path), False

    def aggregate(self, root: Union[str, Path], generated_at: Optional[datetime] = None) -> AggregationResult:
        """
        Collects the files under *root* into one formatted string.

        Raises InvalidRootError if *root* is not an existing directory and
        TraversalError if a directory cannot be listed. Files that cannot be
        read are logged and left out.
        """
        root_path = Path(root)
        if not root_path.exists():
            raise InvalidRootError(f"Root directory '{root}' does not exist")
        if not root_path.is_dir():
            raise InvalidRootError(f"Root path '{root}' is not a directory")

        counts = RunCounts()
        buffer = OutputBuffer(self.config.max_output_size)
        buffer.start(format_header(root, generated_at or datetime.now()))

        if not buffer.limit_reached:
            files = walk_tree(root_path, skip_dir=lambda rel: is_dir_skipped(self.skip_spec, rel))
            for candidate in files:
                data = self._read(candidate, counts)
                if data is None:
                    continue

                entry, is_text = self._entry_for(candidate, data, counts)
                if entry is None:
                    continue

                if not buffer.append(entry):
                    logger.warning(
                        "Size limit of %d bytes reached at %s, remaining files omitted",
                        self.config.max_output_size, candidate.rel_path,
                    )
                    break

                if is_text:
                    counts.file_count += 1
                else:
                    counts.binary_count += 1
        else:
            logger.warning("Size limit of %d bytes is too small for the output header", self.config.max_output_size)

        logger.info("Total processed files: %d", counts.file_count)

        return AggregationResult(
            content=buffer.getvalue(),
            limit_reached=buffer.limit_reached,
            **asdict(counts),
        )


def aggregate(root: Union[str, Path], config: Config, generated_at: Optional[datetime] = None) -> AggregationResult:
    """Convenience wrapper around Aggregator(config).aggregate(root)."""
    return Aggregator(config).aggregate(root, generated_at=generated_at)
