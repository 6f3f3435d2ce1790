"""
Main orchestrator for boilerpipe.

Wires the stages together: Preprocessor → HTMLTokenStream → ContentHandler
→ TextDocument. Classification is left to the caller (see processors.py).
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .content_handler import ContentHandler
from .exceptions import TextDocumentError
from .extractor import TextExtractor
from .logger import get_module_logger, setup_logger
from .preprocessor import Preprocessor
from .schemas import ParseOptions, TextDocument
from .tokenizer import HTMLTokenStream
from .urls import date_from_url

logger = get_module_logger("main")


class DocumentParser:
    """
    Main entry point for segmenting HTML into a TextDocument.

    Each parse() call uses a fresh ContentHandler, so one parser can be
    reused for many documents.
    """

    def __init__(
        self,
        options: Optional[ParseOptions] = None,
        log_level: Optional[int] = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.options = options or ParseOptions()
        self.preprocessor = Preprocessor()
        self.extractor = TextExtractor(self.preprocessor)

    def parse(
        self,
        source,
        url: Optional[str] = None,
        timestamp: Optional[datetime] = None
    ) -> TextDocument:
        """
        Segment an HTML source into text blocks.

        Args:
            source: str, bytes or file-like object holding HTML
            url: Where the document came from; a date in its path becomes
                 the timestamp when none is given
            timestamp: Explicit document timestamp

        Returns:
            TextDocument with title, timestamp, blocks and recoverable errors

        Raises:
            DocumentReadError: if the source cannot be read
            TextDocumentError: in strict mode, if the parser reported
                               recoverable errors (the document is attached)
        """
        logger.info(f"Parsing {url or 'document'}")

        html = self.preprocessor.read_source(source, self.options.encoding)

        tokens = HTMLTokenStream(html)
        handler = ContentHandler(max_line_length=self.options.max_line_length)
        for token in tokens:
            handler.feed(token)
        blocks = handler.close()

        if timestamp is None and url:
            timestamp = date_from_url(url)

        document = TextDocument(
            title=handler.title,
            timestamp=timestamp,
            text_blocks=blocks,
            errors=tokens.errors,
        )
        logger.info(f"Complete: {len(blocks)} blocks")

        if tokens.errors:
            if self.options.strict:
                logger.warning(f"{len(tokens.errors)} recoverable parse errors")
                raise TextDocumentError(tokens.errors, document=document)
            logger.debug(f"{len(tokens.errors)} recoverable parse errors kept on document.errors")

        return document

    def parse_file(self, file_path: Union[str, Path], url: Optional[str] = None) -> TextDocument:
        """Parse an HTML file, detecting its charset from the raw bytes."""
        file_path = Path(file_path)
        return self.parse(file_path.read_bytes(), url=url)

    def extract_text(self, source) -> str:
        """Plain text of an HTML source, without block segmentation."""
        return self.extractor.extract(source, self.options.encoding)


def parse_html(source, url: Optional[str] = None, strict: bool = False) -> TextDocument:
    """Convenience function to parse HTML into a TextDocument."""
    return DocumentParser(ParseOptions(strict=strict)).parse(source, url=url)


def parse_html_file(file_path: Union[str, Path], strict: bool = False) -> TextDocument:
    """Convenience function to parse an HTML file."""
    return DocumentParser(ParseOptions(strict=strict)).parse_file(file_path)
