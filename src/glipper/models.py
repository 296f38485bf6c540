# src/glipper/models.py
from dataclasses import dataclass, replace
from pathlib import Path

from glipper.config import (
    DEFAULT_MAX_OUTPUT_SIZE,
    DEFAULT_SKIP_BINARY_FILES,
    DEFAULT_SKIP_HIDDEN_DIRS,
)

@dataclass(frozen=True)
class Config:
    """Immutable settings for one aggregation run."""
    max_output_size: int = DEFAULT_MAX_OUTPUT_SIZE
    skip_binary_files: bool = DEFAULT_SKIP_BINARY_FILES
    skip_hidden_dirs: bool = DEFAULT_SKIP_HIDDEN_DIRS

    def __post_init__(self):
        if isinstance(self.max_output_size, bool) or not isinstance(self.max_output_size, int):
            raise ValueError(f"max_output_size must be an integer, got {self.max_output_size!r}")
        if self.max_output_size <= 0:
            raise ValueError(f"max_output_size must be positive, got {self.max_output_size}")

    def with_overrides(self, **values) -> "Config":
        """Returns a copy with every non-None value replaced."""
        changes = {key: value for key, value in values.items() if value is not None}
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class FileCandidate:
    """A file found by the walk, not yet read."""
    path: Path
    rel_path: str


@dataclass(frozen=True)
class AggregationResult:
    content: str
    file_count: int = 0
    binary_count: int = 0
    skipped_binary: int = 0
    skipped_large: int = 0
    unreadable: int = 0
    limit_reached: bool = False

    @property
    def size(self) -> int:
        """Size of the content in bytes, as it will be written to the sink."""
        return len(self.content.encode("utf-8"))
