"""
Plain-text extraction.

A cheaper alternative to the full ContentHandler run: walks the same token
stream but keeps no blocks, counters or labels. Text inside ignorable
regions (script, style, ...) is dropped; every other text run is written
with a separating space, unless the last closing tag was an anchor or an
inline-no-whitespace tag (so "<b>foo</b>bar" stays "foobar").

Input:  HTML source (str, bytes or file-like)
Output: one whitespace-collapsed, trimmed string
"""

import re
from typing import Iterable

from .logger import get_module_logger
from .preprocessor import Preprocessor
from .tag_actions import get_tag_policy
from .tokenizer import HTMLTokenStream, Token, TokenType

logger = get_module_logger("extractor")

MULTI_SPACE = re.compile(r"\s+")


class TextExtractor:
    """Extracts readable text from HTML without segmenting it."""

    def __init__(self, preprocessor: Preprocessor = None):
        self.preprocessor = preprocessor or Preprocessor()

    def extract(self, source, encoding: str = None) -> str:
        """
        Extract the readable text of an HTML source.

        Args:
            source: str, bytes or file-like object
            encoding: Optional charset override for byte input

        Returns:
            Whitespace-collapsed text
        """
        html = self.preprocessor.read_source(source, encoding)
        return self.extract_tokens(HTMLTokenStream(html))

    def extract_tokens(self, tokens: Iterable[Token]) -> str:
        """Extract text from an already tokenized document."""
        parts = []
        depth_ignorable = 0
        last_end_tag = ""

        for token in tokens:
            if token.type is TokenType.TEXT:
                if depth_ignorable > 0:
                    continue
                skip_whitespace = False
                if last_end_tag:
                    policy = get_tag_policy(last_end_tag)
                    if policy.is_anchor or policy.is_inline_no_whitespace:
                        skip_whitespace = True
                if not skip_whitespace:
                    parts.append(" ")
                parts.append(token.data)

            elif token.type is TokenType.START_TAG:
                policy = get_tag_policy(token.name)
                if policy.is_ignorable:
                    depth_ignorable += 1

            elif token.type is TokenType.END_TAG:
                policy = get_tag_policy(token.name)
                if policy.is_ignorable and depth_ignorable > 0:
                    depth_ignorable -= 1
                last_end_tag = token.name

            elif token.type is TokenType.SELF_CLOSING_TAG:
                # A void element closes as it opens, so <b>x</b><br>y keeps its space
                last_end_tag = token.name

        text = MULTI_SPACE.sub(" ", "".join(parts)).strip()
        logger.debug(f"Extracted {len(text)} characters of plain text")
        return text


def extract_text(source, encoding: str = None) -> str:
    """Convenience function to extract plain text from HTML."""
    return TextExtractor().extract(source, encoding)
