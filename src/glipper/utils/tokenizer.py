# src/glipper/utils/tokenizer.py
import logging

import tiktoken

logger = logging.getLogger(__name__)

ENCODING_NAMES = ("cl100k_base", "p50k_base")


class Tokenizer:
    _encoding = None
    _unavailable = False

    @classmethod
    def get_encoding(cls):
        """
        Loads the first available encoding once per process.
        Returns None if none can be loaded; the failure is logged once.
        """
        if cls._encoding is None and not cls._unavailable:
            errors = []
            for name in ENCODING_NAMES:
                try:
                    cls._encoding = tiktoken.get_encoding(name)
                    break
                except Exception as e:
                    errors.append(f"{name}: {e}")
            else:
                cls._unavailable = True
                logger.warning("Token encoder unavailable, estimating tokens instead (%s)", "; ".join(errors))
        return cls._encoding

    @classmethod
    def count(cls, text: str) -> int:
        """Estimates token count for a given text."""
        encoding = cls.get_encoding()
        if encoding is None:
            return len(text) // 4
        return len(encoding.encode(text, disallowed_special=()))
