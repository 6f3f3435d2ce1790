"""
Interface for the classification stage.

Processors decide which TextBlocks are content: they read a TextDocument
and set `is_content` and labels on its blocks, or merge neighbouring blocks.
No concrete heuristics live here; this module only fixes the contract and
the order they run in.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from .logger import get_module_logger
from .schemas import TextDocument

logger = get_module_logger("processors")


class BaseProcessor(ABC):
    """Abstract base class for document processors."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def process(self, document: TextDocument) -> bool:
        """
        Update the document in place.

        Args:
            document: The document to classify

        Returns:
            True if any block was changed
        """
        pass


def run_processors(document: TextDocument, processors: Iterable[BaseProcessor]) -> bool:
    """
    Apply processors in order.

    Returns:
        True if at least one processor changed the document
    """
    changed = False
    for processor in processors:
        result = processor.process(document)
        logger.debug(f"{processor.name}: {'changed' if result else 'unchanged'}")
        changed = result or changed
    return changed
