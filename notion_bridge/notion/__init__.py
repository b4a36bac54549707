"""Notion integration: reading, resolving and writing pages."""

from .models import NotionBlock, PageCandidate, CandidateSelection, CreatedPage
from .client import NotionClient, normalize_page_id
from .flattener import BlockFlattener
from .resolver import TitleResolver, pick_candidate
from .writer import ConfirmationRequiredError, ContentWriter

__all__ = [
    "NotionBlock",
    "PageCandidate",
    "CandidateSelection",
    "CreatedPage",
    "NotionClient",
    "normalize_page_id",
    "BlockFlattener",
    "TitleResolver",
    "pick_candidate",
    "ConfirmationRequiredError",
    "ContentWriter",
]
