# src/glipper/errors.py


class GlipperError(Exception):
    """Base exception for glipper errors."""
    pass


class InvalidRootError(GlipperError):
    """Raised when the provided root directory is invalid."""
    pass


class TraversalError(GlipperError):
    """Raised when a directory in the tree cannot be listed."""
    pass


class ConfigFileError(GlipperError):
    """Raised when the config file cannot be written."""
    pass


class ClipboardError(GlipperError):
    """Raised when the system clipboard is unavailable."""
    pass
