"""Content domain exports."""

from .blocks import (
    BlockKind,
    ContentBlock,
    LinkBlock,
    MediaBlock,
    OtherBlock,
    QuestionBlock,
    QuoteBlock,
    RichTextBlock,
    SliderBlock,
    parse_block,
    parse_blocks,
    serialize_blocks,
    serialize_files,
)
from .models import CONTENT_TYPES, Entry, EntryPage
from .repository import EntryRepository
from .rewriter import rewrite_blocks

__all__ = [
    "BlockKind",
    "CONTENT_TYPES",
    "ContentBlock",
    "Entry",
    "EntryPage",
    "EntryRepository",
    "LinkBlock",
    "MediaBlock",
    "OtherBlock",
    "QuestionBlock",
    "QuoteBlock",
    "RichTextBlock",
    "SliderBlock",
    "parse_block",
    "parse_blocks",
    "rewrite_blocks",
    "serialize_blocks",
    "serialize_files",
]
