# src/glipper/clipboard.py
import pyperclip

from glipper.errors import ClipboardError


def copy_to_clipboard(text: str) -> None:
    """Writes *text* to the system clipboard. Raises ClipboardError if there is none."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"Clipboard unavailable: {e}") from e
