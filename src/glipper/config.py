# src/glipper/config.py

DEFAULT_MAX_OUTPUT_SIZE = 64000  # approximately 64 KB
DEFAULT_SKIP_BINARY_FILES = True
DEFAULT_SKIP_HIDDEN_DIRS = True

# Files above this size are never read.
MAX_FILE_SIZE = 1024 * 1024

# Minimum fraction of printable characters for a file to count as text.
TEXT_THRESHOLD = 0.7

HEADER_TITLE = "# GLIPPER OUTPUT"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_HEADER = "## File: {path}\n"
BINARY_PLACEHOLDER = "(Binary file, content skipped)\n"
SIZE_LIMIT_MARKER = "## SIZE LIMIT REACHED\nRemaining files were not added.\n"

HIDDEN_DIR_PATTERNS = [".*/"]

CONFIG_DIR_NAME = "glipper"
CONFIG_FILE_NAME = ".glipper.conf"
