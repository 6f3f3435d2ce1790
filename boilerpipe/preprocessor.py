"""
Source decoding for boilerpipe.

Turns whatever the caller hands in (a string, raw bytes, or an open file or
response body) into a decoded HTML string for the tokenizer. No markup is
repaired here: malformed HTML is left to html5lib.

Pipeline position: first step (Preprocessor → tokenizer → ContentHandler).
Input:  str, bytes or file-like object
Output: decoded HTML string
"""

import re
from typing import Optional

from bs4 import UnicodeDammit

from .exceptions import DocumentReadError
from .logger import get_module_logger

logger = get_module_logger("preprocessor")


class Preprocessor:
    """Decodes HTML sources, matching what a browser would display."""

    # WHATWG encoding spec: browsers silently remap these charsets.
    # https://encoding.spec.whatwg.org/#names-and-labels
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'iso88591': 'windows-1252',
        'latin-1': 'windows-1252',
        'latin1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
        'iso-8859-9': 'windows-1254',
        'iso-8859-11': 'windows-874',
    }

    META_CHARSET_PATTERN = re.compile(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE)
    META_CONTENT_TYPE_PATTERN = re.compile(
        r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)', re.IGNORECASE
    )

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes) -> Optional[str]:
        """
        Detect the charset declared in the first 2048 bytes of a document.

        Looks for <meta charset=...> first, then the legacy
        <meta http-equiv="Content-Type" content="...; charset=..."> form, and
        applies the WHATWG label mapping (e.g. iso-8859-1 → windows-1252).

        Returns:
            The browser-equivalent charset, or None when nothing is declared
        """
        head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

        charset = None
        m = Preprocessor.META_CHARSET_PATTERN.search(head_str)
        if m:
            charset = m.group(1).strip().lower()

        if not charset:
            m = Preprocessor.META_CONTENT_TYPE_PATTERN.search(head_str)
            if m:
                charset = m.group(1).strip().lower()

        if not charset:
            return None

        return Preprocessor.WHATWG_CHARSET_MAP.get(charset, charset)

    def decode(self, raw_bytes: bytes, encoding: Optional[str] = None) -> str:
        """
        Decode raw HTML bytes.

        An explicit encoding wins, then the declared <meta> charset, then
        UnicodeDammit's guess. Undecodable bytes become U+FFFD.
        """
        charset = encoding or self.detect_charset_from_bytes(raw_bytes)
        if charset:
            try:
                return raw_bytes.decode(charset, errors='replace')
            except LookupError:
                logger.warning(f"Unknown charset '{charset}', guessing instead")

        dammit = UnicodeDammit(raw_bytes, ['utf-8'])
        if dammit.unicode_markup is None:
            return raw_bytes.decode('utf-8', errors='replace')
        logger.debug(f"Guessed encoding: {dammit.original_encoding}")
        return dammit.unicode_markup

    def read_source(self, source, encoding: Optional[str] = None) -> str:
        """
        Read and decode an HTML source.

        Args:
            source: str, bytes, or an object with a read() method
            encoding: Optional charset override for byte input

        Returns:
            Decoded HTML string

        Raises:
            DocumentReadError: if reading the source fails
        """
        if isinstance(source, str):
            return source
        if isinstance(source, (bytes, bytearray)):
            return self.decode(bytes(source), encoding)

        if not hasattr(source, 'read'):
            raise TypeError(f"Cannot read HTML from {type(source).__name__}")

        try:
            data = source.read()
        except OSError as e:
            logger.error(f"Reading source failed: {e}")
            raise DocumentReadError(
                f"Reading source failed: {e}",
                details={"error": str(e)}
            ) from e

        if isinstance(data, str):
            return data
        return self.decode(bytes(data), encoding)


def read_source(source, encoding: Optional[str] = None) -> str:
    """Convenience function to read and decode an HTML source."""
    return Preprocessor().read_source(source, encoding)
