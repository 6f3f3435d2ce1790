"""
Pydantic schemas for the values passed between boilerpipe stages.

TextBlock:    one unit of text produced by the ContentHandler
TextDocument: the ordered blocks of one page, plus title and timestamp
ParseOptions: knobs for a DocumentParser run

Data flow:
  tokens → ContentHandler → TextBlocks → TextDocument → processors → text()
"""

import html
import sys
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Label(Enum):
    """Labels processors can attach to a block."""
    INDICATES_END_OF_TEXT = "IndicatesEndOfText"
    MIGHT_BE_CONTENT = "MightBeContent"
    VERY_LIKELY_CONTENT = "VeryLikelyContent"
    TITLE = "Title"
    LIST = "List"
    HEADING = "Heading"
    HEADING1 = "Heading1"
    HEADING2 = "Heading2"
    HEADING3 = "Heading3"


class TextBlock(BaseModel):
    """
    A maximal run of rendered text, treated as one unit by the classifiers.

    Counters are filled in by ContentHandler.flush_block(). The offsets are
    positions in the sequence of emitted blocks, not character offsets.
    Densities are properties so they can never go stale after a merge.
    """
    text: str = ""

    offset_blocks_start: int = 0
    offset_blocks_end: int = 0

    num_words: int = 0
    num_linked_words: int = 0
    num_words_in_wrapped_lines: int = 0
    num_wrapped_lines: int = Field(default=1, ge=1)
    tag_level: int = 0

    is_content: bool = False
    labels: set[Label] = Field(default_factory=set)

    @property
    def text_density(self) -> float:
        """Average number of words per wrapped line."""
        return self.num_words_in_wrapped_lines / self.num_wrapped_lines

    @property
    def link_density(self) -> float:
        """Share of the block's words that sit inside anchor text."""
        if self.num_words == 0:
            return 0.0
        return self.num_linked_words / self.num_words

    def add_labels(self, *labels: Label) -> "TextBlock":
        self.labels.update(labels)
        return self

    def has_label(self, label: Label) -> bool:
        return label in self.labels

    def merge_next(self, next_block: "TextBlock") -> "TextBlock":
        """
        Merge the following block into this one.

        Text is joined with a newline and all counters are summed. Both
        offsets take the minimum of the two blocks' corresponding offsets,
        so the merged block's end offset does not grow.
        """
        self.text = f"{self.text}\n{next_block.text}"

        self.num_words += next_block.num_words
        self.num_linked_words += next_block.num_linked_words
        self.num_words_in_wrapped_lines += next_block.num_words_in_wrapped_lines
        self.num_wrapped_lines += next_block.num_wrapped_lines

        self.offset_blocks_start = min(self.offset_blocks_start, next_block.offset_blocks_start)
        self.offset_blocks_end = min(self.offset_blocks_end, next_block.offset_blocks_end)

        self.is_content = self.is_content or next_block.is_content
        self.labels = self.labels | set(next_block.labels)
        self.tag_level = min(self.tag_level, next_block.tag_level)
        return self


class _BoundaryBlock(TextBlock):
    """Immutable empty block used as a neighbour at either end of a document."""
    model_config = ConfigDict(frozen=True)

    labels: frozenset[Label] = frozenset()


TEXT_BLOCK_EMPTY_START = _BoundaryBlock(
    offset_blocks_start=-sys.maxsize - 1,
    offset_blocks_end=-sys.maxsize - 1,
)
TEXT_BLOCK_EMPTY_END = _BoundaryBlock(
    offset_blocks_start=sys.maxsize,
    offset_blocks_end=sys.maxsize,
)


class TextDocument(BaseModel):
    """
    The text blocks of one HTML page, in document order.

    `errors` lists the recoverable parse errors ("line:col: message") hit
    while tokenizing; the blocks are usable either way.
    """
    title: str = ""
    timestamp: Optional[datetime] = None
    text_blocks: list[TextBlock] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    def content(self) -> str:
        """Text of the blocks marked as content."""
        return self.text(True, False)

    def text(self, include_content: bool, include_non_content: bool) -> str:
        """
        Join the text of the selected blocks, one block per line.

        Leading and trailing spaces/newlines are trimmed and the result is
        HTML-escaped so it can be embedded in markup as-is.

        Args:
            include_content: Include blocks with is_content set
            include_non_content: Include blocks without is_content set

        Returns:
            Escaped text of the selected blocks
        """
        lines = []
        for block in self.text_blocks:
            if block.is_content and not include_content:
                continue
            if not block.is_content and not include_non_content:
                continue
            lines.append(block.text + "\n")

        return html.escape("".join(lines).strip(" \n"))


class ParseOptions(BaseModel):
    """Options for DocumentParser."""
    max_line_length: int = Field(default=80, gt=0)  # Visual line width for wrap statistics
    strict: bool = False                            # Raise TextDocumentError on recoverable errors
    encoding: Optional[str] = None                  # Force the charset used to decode bytes
