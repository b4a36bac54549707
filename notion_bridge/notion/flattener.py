"""Flatten a page's block tree into indented text lines."""

import logging
from typing import List

from .client import NotionClient
from .models import NotionBlock

# Line markers by block type; paragraphs have none.
MARKERS = {
    "paragraph": "",
    "heading_1": "# ",
    "heading_2": "## ",
    "heading_3": "### ",
    "bulleted_list_item": "- ",
    "numbered_list_item": "1. ",
    "quote": "> ",
    "callout": "💬 ",
}

INDENT = "  "


def render_line(block: NotionBlock) -> str:
    """
    Render a block's own text with its marker.

    Args:
        block: Block to render

    Returns:
        Marker and text, stripped; "" for unsupported block types
    """
    if block.block_type == "to_do":
        marker = "[x] " if block.checked else "[ ] "
    elif block.block_type in MARKERS:
        marker = MARKERS[block.block_type]
    else:
        return ""
    return (marker + block.text).strip()


class BlockFlattener:
    """Reads a page depth-first and produces its visible text."""

    def __init__(self, client: NotionClient, max_depth: int = 20):
        """
        Initialize flattener.

        Args:
            client: NotionClient used to list block children
            max_depth: Deepest nesting level that is still read
        """
        self.client = client
        self.max_depth = max_depth
        self.logger = logging.getLogger(__name__)

    async def flatten_lines(self, page_id: str) -> List[str]:
        """Return the page's lines in document order, parents before children."""
        lines: List[str] = []
        for block in await self.client.get_blocks(page_id):
            await self._walk(block, 0, lines)
        return lines

    async def flatten(self, page_id: str) -> str:
        """Return the page's text as newline-joined lines."""
        lines = await self.flatten_lines(page_id)
        self.logger.debug(f"Flattened page {page_id} into {len(lines)} lines")
        return "\n".join(lines)

    async def _walk(self, block: NotionBlock, depth: int, lines: List[str]) -> None:
        line = render_line(block)
        if line:
            lines.append(f"{INDENT * depth}{line}")

        if not block.has_children:
            return

        if depth + 1 > self.max_depth:
            self.logger.warning(
                f"Max depth {self.max_depth} reached at block {block.block_id}, "
                "skipping its children"
            )
            return

        # Unsupported block types are still traversed for their children
        for child in await self.client.get_blocks(block.block_id):
            await self._walk(child, depth + 1, lines)
