"""
Static tag policy table consulted by the ContentHandler and TextExtractor.

Each known tag maps to a TagPolicy: a kind plus the structural flags the
segmenter needs. Tags missing from the table use DEFAULT_TAG_POLICY, which
changes the nesting depth and forces a flush on both enter and exit, so
unrecognized structure always breaks a block.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TagKind(Enum):
    """What a tag does to the segmenter state."""
    IGNORABLE = "ignorable"                        # Subtree text never reaches a block
    ANCHOR = "anchor"                              # Hyperlink, text counts as linked words
    BODY = "body"                                  # Content starts here
    INLINE_NO_WHITESPACE = "inline_no_whitespace"  # Text flows through, no separator added
    INLINE_WHITESPACE = "inline_whitespace"        # Text flows through, separated by a space
    BLOCK = "block"                                # Always breaks a block
    DEFAULT = "default"                            # Unknown tag


class TagPolicy(BaseModel):
    """Structural flags for one tag kind."""
    model_config = ConfigDict(frozen=True)

    kind: TagKind
    changes_tag_level: bool
    flush_on_enter: bool
    flush_on_exit: bool

    @property
    def is_anchor(self) -> bool:
        return self.kind is TagKind.ANCHOR

    @property
    def is_ignorable(self) -> bool:
        return self.kind is TagKind.IGNORABLE

    @property
    def is_inline_no_whitespace(self) -> bool:
        return self.kind is TagKind.INLINE_NO_WHITESPACE


IGNORABLE = TagPolicy(kind=TagKind.IGNORABLE, changes_tag_level=True,
                      flush_on_enter=True, flush_on_exit=True)
ANCHOR = TagPolicy(kind=TagKind.ANCHOR, changes_tag_level=True,
                   flush_on_enter=False, flush_on_exit=False)
# The body flush happens immediately around the depth change, see ContentHandler
BODY = TagPolicy(kind=TagKind.BODY, changes_tag_level=True,
                 flush_on_enter=False, flush_on_exit=False)
INLINE_NO_WHITESPACE = TagPolicy(kind=TagKind.INLINE_NO_WHITESPACE, changes_tag_level=False,
                                 flush_on_enter=False, flush_on_exit=False)
INLINE_WHITESPACE = TagPolicy(kind=TagKind.INLINE_WHITESPACE, changes_tag_level=False,
                              flush_on_enter=False, flush_on_exit=False)
BLOCK = TagPolicy(kind=TagKind.BLOCK, changes_tag_level=True,
                  flush_on_enter=True, flush_on_exit=True)

DEFAULT_TAG_POLICY = TagPolicy(kind=TagKind.DEFAULT, changes_tag_level=True,
                               flush_on_enter=True, flush_on_exit=True)


def _table(policy: TagPolicy, *names: str) -> dict[str, TagPolicy]:
    return {name: policy for name in names}


TAG_POLICIES: dict[str, TagPolicy] = {
    **_table(IGNORABLE, 'style', 'script', 'option', 'object', 'embed',
             'applet', 'link', 'noscript'),
    **_table(ANCHOR, 'a'),
    **_table(BODY, 'body'),
    **_table(INLINE_NO_WHITESPACE, 'strike', 'u', 'b', 'i', 'em', 'strong',
             'span', 'sup', 'code', 'tt', 'sub', 'var', 'font'),
    **_table(INLINE_WHITESPACE, 'abbr', 'acronym', 'br', 'img'),
    **_table(BLOCK, 'li', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'p', 'div', 'title'),
}


def get_tag_policy(tag_name: str) -> TagPolicy:
    """Policy for a tag name; DEFAULT_TAG_POLICY when the tag is not in the table."""
    return TAG_POLICIES.get(tag_name.lower(), DEFAULT_TAG_POLICY)
