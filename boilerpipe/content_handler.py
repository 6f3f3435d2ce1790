"""
Streaming content segmenter.

ContentHandler consumes HTML tokens one at a time and cuts the text into
TextBlocks. Each block records how many words it has, how many of them are
anchor text, how its words wrap at a fixed line width, and the nesting
depth it started at. Those numbers are what the content/boilerplate
processors work on.

Two buffers are kept per block:
  token buffer  = text plus anchor start/end markers, scanned for statistics
  render buffer = clean text only, becomes TextBlock.text

Pipeline position: tokenizer → ContentHandler → TextDocument.
"""

import re
import unicodedata

from .logger import get_module_logger
from .schemas import TextBlock
from .tag_actions import TagKind, TagPolicy, get_tag_policy
from .tokenizer import Token, TokenType

logger = get_module_logger("content_handler")

# Private-use characters keep the markers from colliding with page text
ANCHOR_TEXT_START = "$\ue00a<"
ANCHOR_TEXT_END = ">\ue00a$"

MAX_LINE_LENGTH = 80

WHITESPACE_RUN = re.compile(r"\s+")

# Letters, decimal digits, letter numbers and other numbers
_WORD_CATEGORIES = frozenset({"Lu", "Ll", "Lt", "Lm", "Lo", "Nd", "Nl", "No"})


def is_word(token: str) -> bool:
    """True if the token holds at least one word character."""
    return any(unicodedata.category(ch) in _WORD_CATEGORIES for ch in token)


class ContentHandler:
    """
    Token-driven state machine producing TextBlocks.

    Usage:
        handler = ContentHandler()
        for token in tokens:
            handler.feed(token)
        blocks = handler.close()
    """

    def __init__(self, max_line_length: int = MAX_LINE_LENGTH):
        self.max_line_length = max_line_length

        self.title = ""
        self.text_blocks: list[TextBlock] = []

        self._token_buffer = ""
        self._text_buffer = ""

        self.depth_body = 0
        self.depth_anchor = 0
        self.depth_ignorable = 0
        self.depth_tag = 0
        self.depth_block_tag = -1  # Tag depth of the current block's first text, -1 if none yet

        self.last_start_tag = ""
        self.last_end_tag = ""

        self.offset_blocks = 0
        self.flush = False
        self.in_anchor_text = False
        self.last_was_whitespace = False

        # Anchor-start marker waits for the anchor's first text token
        self._anchor_start_pending = False
        self._anchor_start_written = False

    def __repr__(self) -> str:
        return (
            f"ContentHandler(blocks={len(self.text_blocks)}, "
            f"token_buffer={len(self._token_buffer)}, text_buffer={len(self._text_buffer)}, "
            f"depth_body={self.depth_body}, depth_anchor={self.depth_anchor}, "
            f"depth_ignorable={self.depth_ignorable}, depth_tag={self.depth_tag}, "
            f"depth_block_tag={self.depth_block_tag}, last_start_tag={self.last_start_tag!r}, "
            f"last_end_tag={self.last_end_tag!r}, offset_blocks={self.offset_blocks}, "
            f"flush={self.flush}, in_anchor_text={self.in_anchor_text})"
        )

    # --- Token dispatch ---

    def feed(self, token: Token) -> None:
        """Process one token from the tokenizer."""
        if token.type is TokenType.TEXT:
            self.text_token(token.data)
        elif token.type is TokenType.START_TAG:
            self.start_element(token.name)
        elif token.type is TokenType.END_TAG:
            self.end_element(token.name)
        elif token.type is TokenType.SELF_CLOSING_TAG:
            # Void elements (br, img, ...) open and close in one token
            self.start_element(token.name)
            self.end_element(token.name)
        # Comments and doctypes carry no text

    def close(self) -> list[TextBlock]:
        """Flush the last block at end of stream and return all blocks."""
        self.flush_block()
        return self.text_blocks

    # --- Tags ---

    def start_element(self, tag_name: str) -> None:
        tag_name = tag_name.lower()
        policy = get_tag_policy(tag_name)

        if policy.changes_tag_level:
            self.depth_tag += 1
        self._enter(policy)
        self.flush = policy.flush_on_enter or self.flush

        self.last_start_tag = tag_name

    def end_element(self, tag_name: str) -> None:
        tag_name = tag_name.lower()
        policy = get_tag_policy(tag_name)

        self._exit(policy)
        self.flush = policy.flush_on_exit or self.flush

        if policy.changes_tag_level:
            self.depth_tag -= 1

        if self.flush:
            self.flush_block()

        self.last_end_tag = tag_name

    def _enter(self, policy: TagPolicy) -> None:
        kind = policy.kind
        if kind is TagKind.IGNORABLE:
            self.depth_ignorable += 1
        elif kind is TagKind.ANCHOR:
            self.depth_anchor += 1
            if self.depth_anchor == 1:
                self._anchor_start_pending = True
            else:
                logger.debug("Nested anchor, inner anchor ignored")
        elif kind is TagKind.BODY:
            self.flush_block()
            self.depth_body += 1
        elif kind is TagKind.INLINE_WHITESPACE:
            self._add_whitespace_if_necessary()

    def _exit(self, policy: TagPolicy) -> None:
        kind = policy.kind
        if kind is TagKind.IGNORABLE:
            if self.depth_ignorable > 0:
                self.depth_ignorable -= 1
        elif kind is TagKind.ANCHOR:
            if self.depth_anchor > 0:
                self.depth_anchor -= 1
            if self.depth_anchor == 0:
                if self._anchor_start_written:
                    self._write_marker(ANCHOR_TEXT_END)
                self._anchor_start_pending = False
                self._anchor_start_written = False
        elif kind is TagKind.BODY:
            self.flush_block()
            if self.depth_body > 0:
                self.depth_body -= 1
        elif kind is TagKind.INLINE_WHITESPACE:
            self._add_whitespace_if_necessary()

    # --- Text ---

    def text_token(self, raw: str) -> None:
        if self.flush:
            self.flush_block()
            self.flush = False

        if self.depth_ignorable > 0:
            return

        if not raw:
            return

        was_first_whitespace = raw[0].isspace()
        was_last_whitespace = raw[-1].isspace()
        text = WHITESPACE_RUN.sub(" ", raw).strip()

        if not text:
            if was_first_whitespace or was_last_whitespace:
                if not self.last_was_whitespace:
                    self._append(" ")
                self.last_was_whitespace = True
            else:
                self.last_was_whitespace = False
            return

        if was_first_whitespace and not self.last_was_whitespace:
            self._append(" ")
            self.last_was_whitespace = True

        if self._anchor_start_pending:
            self._write_marker(ANCHOR_TEXT_START)
            self._anchor_start_pending = False
            self._anchor_start_written = True

        if self.depth_block_tag == -1:
            self.depth_block_tag = self.depth_tag

        self._append(text)
        if was_last_whitespace:
            self._append(" ")

        self.last_was_whitespace = was_last_whitespace

    def _append(self, text: str) -> None:
        self._token_buffer += text
        self._text_buffer += text

    def _add_whitespace_if_necessary(self) -> None:
        if self.depth_ignorable > 0 or self.last_was_whitespace:
            return
        self._append(" ")
        self.last_was_whitespace = True

    def _write_marker(self, marker: str) -> None:
        # The separating space lands in both buffers so the rendered text
        # splits into the same words the token scan counts
        if not self.last_was_whitespace:
            self._append(" ")
        self._token_buffer += marker + " "
        self.last_was_whitespace = True

    # --- Blocks ---

    def flush_block(self) -> None:
        """
        Close the current accumulation and emit it as a TextBlock if it
        holds any words.

        Before <body> nothing is emitted; text collected right after a
        <title> start tag becomes the document title if none is set yet.
        """
        if self.depth_body == 0:
            if self.last_start_tag == "title":
                title = self._token_buffer.strip()
                if title and not self.title:
                    self.title = title
                    logger.debug(f"Title: {title!r}")
            self._reset_block()
            return

        if not self._token_buffer:
            return

        if len(self._token_buffer) == 1 and self.last_was_whitespace:
            self._reset_block()
            return

        num_words = 0
        num_linked_words = 0
        num_wrapped_lines = 0
        num_tokens = 0
        num_words_current_line = 0
        current_line_length = -1  # The first token has no leading separator

        for token in self._token_buffer.split(" "):
            if token == ANCHOR_TEXT_START:
                self.in_anchor_text = True
            elif token == ANCHOR_TEXT_END:
                self.in_anchor_text = False
            elif not token:
                continue
            elif is_word(token):
                num_tokens += 1
                num_words += 1
                num_words_current_line += 1
                if self.in_anchor_text:
                    num_linked_words += 1

                current_line_length += len(token) + 1
                if current_line_length > self.max_line_length:
                    num_wrapped_lines += 1
                    current_line_length = len(token)
                    num_words_current_line = 1
            else:
                num_tokens += 1

        if num_tokens == 0:
            self._reset_block()
            return

        if num_wrapped_lines == 0:
            num_words_in_wrapped_lines = num_words
            num_wrapped_lines = 1
        else:
            num_words_in_wrapped_lines = num_words - num_words_current_line

        text = self._text_buffer.strip()
        if text:
            self.text_blocks.append(TextBlock(
                text=text,
                offset_blocks_start=self.offset_blocks,
                offset_blocks_end=self.offset_blocks,
                num_words=num_words,
                num_linked_words=num_linked_words,
                num_words_in_wrapped_lines=num_words_in_wrapped_lines,
                num_wrapped_lines=num_wrapped_lines,
                tag_level=self.depth_block_tag,
            ))
            logger.debug(
                f"Block {self.offset_blocks}: {num_words} words, "
                f"{num_linked_words} linked, level {self.depth_block_tag}"
            )
            self.offset_blocks += 1

        self._reset_block()

    def _reset_block(self) -> None:
        self._token_buffer = ""
        self._text_buffer = ""
        self.depth_block_tag = -1
