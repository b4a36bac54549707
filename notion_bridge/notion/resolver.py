"""Resolve a free-text title to at most one Notion page."""

import logging
from typing import List

from .client import NotionClient
from .models import CandidateSelection, PageCandidate


def pick_candidate(title: str, candidates: List[PageCandidate]) -> CandidateSelection:
    """
    Apply the selection rule to a candidate list.

    An exact title match wins wherever it sits in the list. Failing that, a
    lone candidate is picked as a non-exact match. Anything else is left
    unresolved so the caller can choose.

    Args:
        title: Title the caller asked for
        candidates: Search results with non-empty titles

    Returns:
        CandidateSelection carrying the full candidate list
    """
    selection = CandidateSelection(query=title, candidates=list(candidates))

    for candidate in candidates:
        if candidate.title == title:
            selection.picked = candidate
            selection.exact = True
            return selection

    if len(candidates) == 1:
        selection.picked = candidates[0]
    return selection


class TitleResolver:
    """Searches Notion for pages by title and picks one deterministically."""

    def __init__(self, client: NotionClient, search_limit: int = 10):
        self.client = client
        self.search_limit = search_limit
        self.logger = logging.getLogger(__name__)

    async def find(self, title: str) -> List[PageCandidate]:
        """Return titled search results for the query, in Notion's order."""
        return await self.client.search_pages(title, limit=self.search_limit)

    async def resolve(self, title: str) -> CandidateSelection:
        """Search for the title and select a page from the results."""
        candidates = await self.find(title)
        selection = pick_candidate(title, candidates)

        if selection.resolved:
            self.logger.info(
                f"Resolved title {title!r} to page {selection.picked.page_id} "
                f"(exact={selection.exact})"
            )
        else:
            self.logger.info(
                f"Could not resolve title {title!r}: {len(candidates)} candidates"
            )
        return selection
