"""Dataclasses for Notion data handled by the bridge."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class NotionBlock:
    """Represents a Notion block of content."""

    block_id: str
    block_type: str
    text: str = ""
    has_children: bool = False
    checked: bool = False


@dataclass
class PageCandidate:
    """A page returned by a title search."""

    page_id: str
    title: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.page_id, "url": self.url, "title": self.title}


@dataclass
class CandidateSelection:
    """Outcome of resolving a title against search candidates."""

    query: str
    candidates: List[PageCandidate] = field(default_factory=list)
    picked: Optional[PageCandidate] = None
    exact: bool = False

    @property
    def resolved(self) -> bool:
        return self.picked is not None


@dataclass
class CreatedPage:
    """A page created through the bridge."""

    page_id: str
    url: Optional[str]
