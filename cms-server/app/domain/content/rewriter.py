"""Resolution of file names embedded in content blocks."""

from __future__ import annotations

import dataclasses
from typing import Awaitable, Callable, Sequence, Union

from app.domain.files.models import FileRecord

from .blocks import ContentBlock, MediaBlock, SliderBlock

Resolver = Callable[[Sequence[str]], Awaitable[Union[FileRecord, list[FileRecord]]]]


def _names(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [item for item in value if isinstance(item, str)]  # type: ignore[union-attr]


async def rewrite_blocks(blocks: Sequence[ContentBlock], resolve: Resolver) -> list[ContentBlock]:
    """Replace file names in media and slider blocks with resolved file records.

    Blocks are handled one at a time so a later block sees files uploaded for
    an earlier one. Other kinds are passed through as they are.
    """
    rewritten: list[ContentBlock] = []
    for block in blocks:
        if isinstance(block, MediaBlock):
            rewritten.append(dataclasses.replace(block, file=await resolve(_names(block.file))))
        elif isinstance(block, SliderBlock):
            rewritten.append(dataclasses.replace(block, files=await resolve(_names(block.files))))
        else:
            rewritten.append(block)
    return rewritten
