"""
Tests for the TextBlock / TextDocument models.
"""

import pytest
from pydantic import ValidationError

from boilerpipe.schemas import (
    Label,
    TextBlock,
    TextDocument,
    TEXT_BLOCK_EMPTY_END,
    TEXT_BLOCK_EMPTY_START,
)


def make_block(text, offset, **counts):
    return TextBlock(text=text, offset_blocks_start=offset, offset_blocks_end=offset, **counts)


def test_densities():
    block = make_block("a b c d", 0, num_words=10, num_linked_words=4,
                       num_words_in_wrapped_lines=6, num_wrapped_lines=2)

    assert block.text_density == 3.0
    assert block.link_density == 0.4


def test_link_density_without_words_is_zero():
    block = make_block("...", 0, num_words=0, num_linked_words=0)

    assert block.link_density == 0.0
    assert block.num_wrapped_lines == 1


def test_wrapped_lines_must_be_positive():
    with pytest.raises(ValidationError):
        TextBlock(text="x", num_wrapped_lines=0)


def test_merge_sums_counters():
    a = make_block("first", 0, num_words=5, num_linked_words=1,
                   num_words_in_wrapped_lines=5, num_wrapped_lines=1, tag_level=3)
    b = make_block("second", 1, num_words=20, num_linked_words=10,
                   num_words_in_wrapped_lines=12, num_wrapped_lines=2, tag_level=2)

    a.merge_next(b)

    assert a.text == "first\nsecond"
    assert a.num_words == 25
    assert a.num_linked_words == 11
    assert a.num_words_in_wrapped_lines == 17
    assert a.num_wrapped_lines == 3
    assert a.tag_level == 2
    # Densities follow the merged counts
    assert a.link_density == 11 / 25
    assert a.text_density == 17 / 3


def test_merge_offsets_take_minimum_known_suspect():
    """
    Both offsets take the minimum of the two blocks, so merging block 4 into
    block 3 leaves the end offset at 3 instead of widening it to 4. This is
    the inherited behaviour and is kept until upstream clarifies whether the
    end offset should take the maximum.
    """
    a = make_block("a", 3)
    b = make_block("b", 4)

    a.merge_next(b)

    assert a.offset_blocks_start == 3
    assert a.offset_blocks_end == 3


def test_merge_labels_and_content_flag():
    a = make_block("a", 0).add_labels(Label.HEADING, Label.HEADING1)
    b = make_block("b", 1).add_labels(Label.HEADING, Label.VERY_LIKELY_CONTENT)
    b.is_content = True

    a.merge_next(b)

    assert a.labels == {Label.HEADING, Label.HEADING1, Label.VERY_LIKELY_CONTENT}
    assert a.is_content
    assert a.has_label(Label.VERY_LIKELY_CONTENT)
    assert not a.has_label(Label.TITLE)


def test_merge_does_not_touch_next_block():
    a = make_block("a", 0, num_words=1)
    b = make_block("b", 1, num_words=2).add_labels(Label.LIST)

    a.merge_next(b)
    a.add_labels(Label.TITLE)

    assert b.text == "b"
    assert b.num_words == 2
    assert b.labels == {Label.LIST}


def test_sentinel_blocks():
    assert TEXT_BLOCK_EMPTY_START.text == ""
    assert TEXT_BLOCK_EMPTY_END.text == ""
    assert TEXT_BLOCK_EMPTY_START.offset_blocks_start < -(2 ** 31)
    assert TEXT_BLOCK_EMPTY_END.offset_blocks_end > 2 ** 31
    assert TEXT_BLOCK_EMPTY_START.text_density == 0.0
    assert TEXT_BLOCK_EMPTY_END.link_density == 0.0


def test_sentinel_blocks_are_immutable():
    with pytest.raises(ValidationError):
        TEXT_BLOCK_EMPTY_START.is_content = True

    with pytest.raises(ValidationError):
        TEXT_BLOCK_EMPTY_END.merge_next(make_block("x", 0))

    assert TEXT_BLOCK_EMPTY_END.text == ""


def _document():
    return TextDocument(
        title="Doc",
        text_blocks=[
            make_block("Navigation", 0),
            make_block("Article body", 1),
            make_block("Footer & <links>", 2),
        ],
    )


def test_text_without_content_flags():
    doc = _document()

    assert doc.text(True, True) == doc.text(False, True)
    assert doc.text(True, True) == "Navigation\nArticle body\nFooter &amp; &lt;links&gt;"
    assert doc.content() == ""


def test_text_with_all_blocks_content():
    doc = _document()
    for block in doc.text_blocks:
        block.is_content = True

    assert doc.text(True, True) == doc.text(True, False)
    assert doc.text(False, True) == ""


def test_content_projection():
    doc = _document()
    doc.text_blocks[1].is_content = True

    assert doc.content() == "Article body"
    assert doc.text(False, True) == "Navigation\nFooter &amp; &lt;links&gt;"
    assert doc.text(False, False) == ""


def test_text_trims_blank_edges():
    doc = TextDocument(text_blocks=[make_block(" ", 0), make_block("middle", 1), make_block("", 2)])

    assert doc.text(True, True) == "middle"
