"""Notion API client wrapper used by the bridge."""

import logging
import re
from typing import Any, Dict, List, Optional

from notion_client import AsyncClient

from .models import NotionBlock, PageCandidate

# Notion API limits
MAX_PAGE_SIZE = 100
MAX_APPEND_CHILDREN = 100

_PAGE_ID_RE = re.compile(r"([0-9a-fA-F]{32})$")


def plain_text(rich_text: Optional[List[Dict[str, Any]]]) -> str:
    """Concatenate the plain_text of a rich text array, dropping styling."""
    return "".join((run.get("plain_text") or "") for run in rich_text or [])


def normalize_page_id(value: str) -> str:
    """
    Accept either a bare page ID or a Notion page URL.

    Args:
        value: Page ID or URL such as https://www.notion.so/My-Page-<32 hex>

    Returns:
        The page ID as given, or the ID extracted from the URL
    """
    value = value.strip()
    if not value.startswith("http"):
        return value

    last_segment = value.split("?")[0].split("#")[0].rstrip("/").split("/")[-1]
    match = _PAGE_ID_RE.search(last_segment.replace("-", ""))
    return match.group(1) if match else last_segment


class NotionClient:
    """Async Notion API client with pagination and content helpers."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        page_size: int = MAX_PAGE_SIZE,
        sdk: Optional[Any] = None,
    ):
        """
        Initialize Notion client.

        Args:
            api_key: Notion integration token
            page_size: Page size used when listing block children
            sdk: Pre-built SDK client (anything exposing the AsyncClient
                surface); when omitted an AsyncClient is created from api_key
        """
        self.client = sdk if sdk is not None else AsyncClient(auth=api_key)
        self.page_size = min(page_size, MAX_PAGE_SIZE)
        self.logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()

    @staticmethod
    def get_page_title(page: Dict[str, Any]) -> str:
        """
        Extract title from page properties.

        Args:
            page: Page object from Notion API

        Returns:
            Title text of the property typed "title", or "" if there is none
        """
        for prop in (page.get("properties") or {}).values():
            if isinstance(prop, dict) and prop.get("type") == "title":
                return plain_text(prop.get("title"))
        return ""

    @staticmethod
    def to_block(block: Dict[str, Any]) -> NotionBlock:
        """Convert a raw block object into a NotionBlock."""
        block_type = block.get("type", "")
        data = block.get(block_type) or {}
        return NotionBlock(
            block_id=block["id"],
            block_type=block_type,
            text=plain_text(data.get("rich_text")),
            has_children=bool(block.get("has_children", False)),
            checked=bool(data.get("checked", False)),
        )

    async def get_blocks(self, block_id: str) -> List[NotionBlock]:
        """
        Fetch all child blocks of a page or block, handling pagination.

        Pages are requested one after another so the result keeps Notion's order.

        Args:
            block_id: Page ID or block ID

        Returns:
            List of NotionBlock objects
        """
        blocks = []
        cursor = None

        while True:
            response = await self.client.blocks.children.list(
                block_id=block_id, start_cursor=cursor, page_size=self.page_size
            )

            for block in response.get("results", []):
                blocks.append(self.to_block(block))

            if not response.get("has_more"):
                break
            cursor = response.get("next_cursor")

        self.logger.debug(f"Fetched {len(blocks)} child blocks of {block_id}")
        return blocks

    async def search_pages(self, query: str, limit: int = 10) -> List[PageCandidate]:
        """
        Search pages by text and return those with a non-empty title.

        Args:
            query: Search text
            limit: Maximum number of results requested from Notion

        Returns:
            Candidates in the order Notion returned them
        """
        response = await self.client.search(
            query=query,
            filter={"property": "object", "value": "page"},
            page_size=limit,
        )

        candidates = []
        for page in response.get("results", []):
            title = self.get_page_title(page)
            if not title:
                continue
            candidates.append(
                PageCandidate(page_id=page["id"], title=title, url=page.get("url"))
            )
        return candidates

    async def append_blocks(self, block_id: str, children: List[Dict[str, Any]]) -> int:
        """
        Append blocks under a page or block.

        Children are sent in chunks that respect the per-request limit.

        Args:
            block_id: Target page or block ID
            children: Block objects to append

        Returns:
            Number of blocks appended
        """
        for start in range(0, len(children), MAX_APPEND_CHILDREN):
            chunk = children[start:start + MAX_APPEND_CHILDREN]
            await self.client.blocks.children.append(block_id=block_id, children=chunk)
        return len(children)

    async def archive_block(self, block_id: str) -> None:
        """Archive (soft-delete) a block and, with it, its descendants."""
        await self.client.blocks.update(block_id=block_id, archived=True)

    async def create_page(
        self,
        parent_page_id: str,
        title: str,
        children: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Create a page under a parent page.

        Args:
            parent_page_id: Parent page ID
            title: Title of the new page
            children: Initial content blocks

        Returns:
            Page object from Notion API
        """
        page = await self.client.pages.create(
            parent={"type": "page_id", "page_id": parent_page_id},
            properties={
                "title": {"title": [{"type": "text", "text": {"content": title}}]},
            },
            children=children[:MAX_APPEND_CHILDREN],
        )

        remainder = children[MAX_APPEND_CHILDREN:]
        if remainder:
            await self.append_blocks(page["id"], remainder)
        return page
