"""Content blocks attached to entries.

Blocks arrive as mappings tagged by ``__component`` (``shared.media``,
``shared.slider`` ...). Each known tag maps to one frozen dataclass; unknown
tags are kept as :class:`OtherBlock`. Every block holds the mapping it was
parsed from and serializes from a copy of it, so only the file fields of media
and slider blocks can differ after a round trip.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from app.domain.files.models import FileRecord


class BlockKind(str, Enum):
    MEDIA = "shared.media"
    SLIDER = "shared.slider"
    RICH_TEXT = "shared.rich-text"
    QUOTE = "shared.quote"
    QUESTION = "shared.question"
    LINK = "shared.link"


COMPONENT_KEY = "__component"

FileField = Union[str, list[str], FileRecord, list[FileRecord], None]


def serialize_files(value: Any) -> Any:
    if isinstance(value, FileRecord):
        return value.to_reference()
    if isinstance(value, list):
        return [serialize_files(item) for item in value]
    return value


def _with_files(raw: Mapping[str, Any], key: str, value: FileField) -> dict[str, Any]:
    payload = copy.deepcopy(dict(raw))
    if key in payload or value is not None:
        payload[key] = serialize_files(value)
    return payload


@dataclass(frozen=True, slots=True)
class MediaBlock:
    file: FileField
    raw: dict[str, Any] = field(default_factory=lambda: {COMPONENT_KEY: BlockKind.MEDIA.value})

    def to_dict(self) -> dict[str, Any]:
        return _with_files(self.raw, "file", self.file)


@dataclass(frozen=True, slots=True)
class SliderBlock:
    files: FileField
    raw: dict[str, Any] = field(default_factory=lambda: {COMPONENT_KEY: BlockKind.SLIDER.value})

    def to_dict(self) -> dict[str, Any]:
        return _with_files(self.raw, "files", self.files)


@dataclass(frozen=True, slots=True)
class RichTextBlock:
    body: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.raw)


@dataclass(frozen=True, slots=True)
class QuoteBlock:
    title: str | None
    body: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.raw)


@dataclass(frozen=True, slots=True)
class QuestionBlock:
    title: str | None
    content: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.raw)


@dataclass(frozen=True, slots=True)
class LinkBlock:
    text: str | None
    url: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.raw)


@dataclass(frozen=True, slots=True)
class OtherBlock:
    component: str | None
    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.raw)


ContentBlock = Union[MediaBlock, SliderBlock, RichTextBlock, QuoteBlock, QuestionBlock, LinkBlock, OtherBlock]


def parse_block(raw: Mapping[str, Any]) -> ContentBlock:
    component = raw.get(COMPONENT_KEY)
    source = copy.deepcopy(dict(raw))
    if component == BlockKind.MEDIA.value:
        return MediaBlock(file=copy.deepcopy(raw.get("file")), raw=source)
    if component == BlockKind.SLIDER.value:
        return SliderBlock(files=copy.deepcopy(raw.get("files")), raw=source)
    if component == BlockKind.RICH_TEXT.value:
        return RichTextBlock(body=raw.get("body"), raw=source)
    if component == BlockKind.QUOTE.value:
        return QuoteBlock(title=raw.get("title"), body=raw.get("body"), raw=source)
    if component == BlockKind.QUESTION.value:
        return QuestionBlock(title=raw.get("title"), content=raw.get("content"), raw=source)
    if component == BlockKind.LINK.value:
        return LinkBlock(text=raw.get("text"), url=raw.get("URL"), raw=source)
    return OtherBlock(component=component, raw=source)


def parse_blocks(raw_blocks: list[Mapping[str, Any]] | None) -> list[ContentBlock]:
    return [parse_block(raw) for raw in raw_blocks or []]


def serialize_blocks(blocks: list[ContentBlock]) -> list[dict[str, Any]]:
    return [block.to_dict() for block in blocks]
