"""
HTML token stream backed by html5lib.

html5lib builds a WHATWG-conformant tree (implied <html>, <head> and <body>
are always present) and its tree walker replays that tree as a flat token
stream. HTMLTokenStream adapts those tokens to the small Token type the
ContentHandler and TextExtractor consume.

Input:  decoded HTML string
Output: iterator of Token, plus `errors` (recoverable parse errors) once drained.
        Doctype-only complaints (IGNORED_ERROR_CODES) are left out.
"""

from enum import Enum
from typing import Iterator, NamedTuple

import html5lib
from html5lib.constants import E

from .logger import get_module_logger

logger = get_module_logger("tokenizer")


class TokenType(Enum):
    TEXT = "text"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    COMMENT = "comment"
    DOCTYPE = "doctype"


class Token(NamedTuple):
    type: TokenType
    name: str = ""   # Lowercase tag name for tag tokens
    data: str = ""   # Text for TEXT and COMMENT tokens


# html5lib tree walker token types → our token types.
# Characters and SpaceCharacters are both text; "Entity" and
# "SerializeError" carry nothing we segment on.
_WALKER_TYPES = {
    "Characters": TokenType.TEXT,
    "SpaceCharacters": TokenType.TEXT,
    "StartTag": TokenType.START_TAG,
    "EndTag": TokenType.END_TAG,
    "EmptyTag": TokenType.SELF_CLOSING_TAG,
    "Comment": TokenType.COMMENT,
    "Doctype": TokenType.DOCTYPE,
}


# A missing or legacy doctype only switches html5lib into quirks mode; the
# markup itself is fine, so these are not reported. Every other tokenizer or
# tree-construction error (stray end tags, duplicate attributes, ...) is.
IGNORED_ERROR_CODES = frozenset({
    "expected-doctype-but-got-chars",
    "expected-doctype-but-got-start-tag",
    "expected-doctype-but-got-end-tag",
    "expected-doctype-but-got-eof",
    "unknown-doctype",
})


def _format_error(error) -> str:
    """Render one html5lib parser error as "line:col: message"."""
    position, code, datavars = error
    try:
        message = E.get(code, code) % (datavars or {})
    except (KeyError, TypeError, ValueError):
        message = code
    line, col = position if position else (0, 0)
    return f"{line}:{col}: {message}"


class HTMLTokenStream:
    """
    Iterable token stream over one HTML document.

    The walker splits a text node into leading whitespace, characters and
    trailing whitespace; those pieces are joined back so every text run
    reaches the consumer as a single TEXT token.
    """

    def __init__(self, html: str):
        self.html = html
        self.errors: list[str] = []

    def __iter__(self) -> Iterator[Token]:
        parser = html5lib.HTMLParser(tree=html5lib.getTreeBuilder("etree"))
        tree = parser.parse(self.html)
        self.errors = [
            _format_error(err) for err in parser.errors
            if err[1] not in IGNORED_ERROR_CODES
        ]
        if self.errors:
            logger.debug(f"html5lib reported {len(self.errors)} parse errors")

        walker = html5lib.getTreeWalker("etree")
        pending_text = []

        for item in walker(tree):
            token_type = _WALKER_TYPES.get(item["type"])
            if token_type is None:
                continue

            if token_type is TokenType.TEXT:
                pending_text.append(item["data"])
                continue

            if pending_text:
                yield Token(TokenType.TEXT, data="".join(pending_text))
                pending_text = []

            if token_type is TokenType.COMMENT:
                yield Token(token_type, data=item.get("data", ""))
            elif token_type is TokenType.DOCTYPE:
                yield Token(token_type, name=item.get("name") or "")
            else:
                yield Token(token_type, name=item["name"].lower())

        if pending_text:
            yield Token(TokenType.TEXT, data="".join(pending_text))


def tokenize(html: str) -> Iterator[Token]:
    """Convenience function to iterate the tokens of an HTML string."""
    return iter(HTMLTokenStream(html))
