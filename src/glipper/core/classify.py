# src/glipper/core/classify.py
from glipper.config import TEXT_THRESHOLD

_ASCII_WHITESPACE = frozenset(b"\n\r\t")

# str.isspace() accepts the information separators, which are control characters.
_INFO_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def _ascii_printable_ratio(data: bytes) -> float:
    count = sum(1 for b in data if b <= 127 and (b >= 32 or b in _ASCII_WHITESPACE))
    return count / len(data)


def _unicode_printable_ratio(text: str) -> float:
    count = sum(
        1 for ch in text if ch.isprintable() or (ch.isspace() and ch not in _INFO_SEPARATORS)
    )
    return count / len(text)


def is_text_content(data: bytes, threshold: float = TEXT_THRESHOLD) -> bool:
    """
    Decides whether *data* is mostly text.

    Valid UTF-8 is judged by the share of printable or whitespace code points;
    anything else by the share of printable ASCII bytes (plus newline, carriage
    return and tab). Empty content counts as text.
    """
    if not data:
        return True

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return _ascii_printable_ratio(data) >= threshold

    return _unicode_printable_ratio(text) >= threshold


def decode_text(data: bytes) -> str:
    """Decodes file content for output; invalid UTF-8 sequences are replaced."""
    return data.decode("utf-8", errors="replace")
