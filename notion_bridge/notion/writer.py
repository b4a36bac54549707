"""Write plain text into Notion pages."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from .client import NotionClient
from .models import CreatedPage

# Notion limit on the length of a single text object
MAX_TEXT_LENGTH = 2000

_LINE_BREAK_RE = re.compile(r"\r?\n")


class ConfirmationRequiredError(Exception):
    """Raised when a destructive write is attempted without confirmation."""


def split_lines(content: str) -> List[str]:
    """Split text on line breaks, strip each line and drop the blank ones."""
    return [line.strip() for line in _LINE_BREAK_RE.split(content) if line.strip()]


def paragraph_block(line: str) -> Dict[str, Any]:
    """
    Build a paragraph block holding one line of plain text.

    Lines longer than the text object limit are split into several runs of the
    same paragraph.
    """
    runs = [
        {"type": "text", "text": {"content": line[start:start + MAX_TEXT_LENGTH]}}
        for start in range(0, len(line), MAX_TEXT_LENGTH)
    ]
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": runs},
    }


def text_to_blocks(content: str) -> List[Dict[str, Any]]:
    """Convert freeform text into paragraph blocks, one per non-blank line."""
    return [paragraph_block(line) for line in split_lines(content)]


@dataclass
class ReplaceResult:
    """Counts from a clear-then-append replacement."""

    cleared_blocks: int
    appended: int


class ContentWriter:
    """Appends, clears, creates and replaces page content."""

    def __init__(
        self,
        client: NotionClient,
        archive_batch_size: int = 25,
        archive_pause_seconds: float = 0.15,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize writer.

        Args:
            client: NotionClient used for all writes
            archive_batch_size: Archive calls between two throttle pauses
            archive_pause_seconds: Length of each throttle pause
            sleep: Coroutine function used to pause
        """
        self.client = client
        self.archive_batch_size = archive_batch_size
        self.archive_pause_seconds = archive_pause_seconds
        self._sleep = sleep
        self.logger = logging.getLogger(__name__)

    async def append_text(self, page_id: str, content: str) -> int:
        """
        Append each non-blank line of content as a paragraph.

        Args:
            page_id: Target page ID
            content: Freeform text; lines are not parsed as markdown

        Returns:
            Number of blocks appended
        """
        children = text_to_blocks(content)
        if not children:
            self.logger.debug(f"Nothing to append to page {page_id}")
            return 0

        appended = await self.client.append_blocks(page_id, children)
        self.logger.info(f"Appended {appended} blocks to page {page_id}")
        return appended

    async def clear_page(self, page_id: str) -> int:
        """
        Archive every top-level block of a page.

        Children disappear together with their archived parent. The loop pauses
        after each batch of archive calls to stay under Notion's rate limit.

        Args:
            page_id: Target page ID

        Returns:
            Number of top-level blocks archived
        """
        blocks = await self.client.get_blocks(page_id)

        for count, block in enumerate(blocks, start=1):
            await self.client.archive_block(block.block_id)
            if count % self.archive_batch_size == 0:
                await self._sleep(self.archive_pause_seconds)

        self.logger.info(f"Archived {len(blocks)} top-level blocks of page {page_id}")
        return len(blocks)

    async def create_page(self, parent_page_id: str, title: str, content: str) -> CreatedPage:
        """
        Create a page with the given title and text as its initial content.

        Args:
            parent_page_id: Parent page ID
            title: Title of the new page
            content: Freeform text converted to paragraphs

        Returns:
            CreatedPage with the new page's ID and URL
        """
        children = text_to_blocks(content)
        page = await self.client.create_page(parent_page_id, title, children)
        self.logger.info(f"Created page {page['id']} under {parent_page_id}")
        return CreatedPage(page_id=page["id"], url=page.get("url"))

    async def replace_text(self, page_id: str, content: str, confirm: bool = False) -> ReplaceResult:
        """
        Clear a page and write new content into it.

        Args:
            page_id: Target page ID
            content: Freeform text for the new content
            confirm: Must be True; existing content is lost

        Returns:
            ReplaceResult with the archived and appended block counts

        Raises:
            ConfirmationRequiredError: If confirm is not True
        """
        if confirm is not True:
            raise ConfirmationRequiredError(
                "This will clear existing content. Set confirm=true to proceed."
            )

        cleared = await self.clear_page(page_id)
        appended = await self.append_text(page_id, content)
        return ReplaceResult(cleared_blocks=cleared, appended=appended)
