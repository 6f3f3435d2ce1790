"""
boilerpipe

Segments HTML into text blocks annotated with word counts, line-wrap
statistics, link density and nesting depth, the input for
content/boilerplate classification.
- Preprocessor:   decodes str/bytes/file sources
- ContentHandler: token-driven segmenter producing TextBlocks
- TextExtractor:  plain-text mode, no blocks
- DocumentParser: runs the stages and returns a TextDocument

Public API surface:
  Pipeline classes:  DocumentParser, ContentHandler, TextExtractor, Preprocessor
  Data models:       TextDocument, TextBlock, Label, ParseOptions
  Classification:    BaseProcessor, run_processors
  Error types:       DocumentReadError (fatal), TextDocumentError (partial)
"""

from .preprocessor import Preprocessor
from .content_handler import ContentHandler
from .extractor import TextExtractor, extract_text
from .main import DocumentParser, parse_html, parse_html_file

from .schemas import (
    Label,
    ParseOptions,
    TextBlock,
    TextDocument,
    TEXT_BLOCK_EMPTY_END,
    TEXT_BLOCK_EMPTY_START,
)
from .processors import BaseProcessor, run_processors

from .exceptions import BoilerpipeError, DocumentReadError, TextDocumentError

__version__ = "0.1.0"
__all__ = [
    "DocumentParser",
    "ContentHandler",
    "TextExtractor",
    "Preprocessor",
    "parse_html",
    "parse_html_file",
    "extract_text",
    "TextDocument",
    "TextBlock",
    "Label",
    "ParseOptions",
    "TEXT_BLOCK_EMPTY_START",
    "TEXT_BLOCK_EMPTY_END",
    "BaseProcessor",
    "run_processors",
    "BoilerpipeError",
    "DocumentReadError",
    "TextDocumentError",
]
