"""
Data models for the Otakudesu scraping API layer.

All models use dataclasses for lightweight internal usage and easy
serialisation to dicts / JSON (for the FastAPI REST layer).
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Listing card (homepage blocks and paginated listings)
# ---------------------------------------------------------------------------

@dataclass
class AnimeSummary:
    """One anime card as it appears on the homepage or a listing page.

    Ongoing cards carry ``day_updated``; completed cards carry ``score``,
    which is NaN when the page text is not a number.
    """
    title: str
    id: str
    thumb: str = ''
    episode: str = ''
    uploaded_on: str = ''
    link: str = ''
    score: Optional[float] = None
    day_updated: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'title': self.title,
            'id': self.id,
            'thumb': self.thumb,
            'episode': self.episode,
            'uploaded_on': self.uploaded_on,
        }
        if self.day_updated is not None:
            data['day_updated'] = self.day_updated
        if self.score is not None:
            data['score'] = self.score
        data['link'] = self.link
        return data


# ---------------------------------------------------------------------------
# Alphabetical catalog entry
# ---------------------------------------------------------------------------

@dataclass
class AnimeListEntry:
    """A row of the full anime list, tagged with its letter bucket."""
    title: str
    full_title: str
    id: str
    link: str
    letter: str = ''

    def to_dict(self) -> dict:
        return asdict(self)

    def to_grouped_dict(self) -> dict:
        """Same as ``to_dict`` without the ``letter`` key."""
        return {
            'title': self.title,
            'full_title': self.full_title,
            'id': self.id,
            'link': self.link,
        }


# ---------------------------------------------------------------------------
# Page-level result containers
# ---------------------------------------------------------------------------

@dataclass
class HomePageResult:
    """Both homepage blocks."""
    on_going: List[AnimeSummary] = field(default_factory=list)
    complete: List[AnimeSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'on_going': {
                'total': len(self.on_going),
                'list': [a.to_dict() for a in self.on_going],
            },
            'complete': {
                'total': len(self.complete),
                'list': [a.to_dict() for a in self.complete],
            },
        }


@dataclass
class ListingPageResult:
    """One page of the complete-anime or ongoing-anime listing."""
    anime_list: List[AnimeSummary] = field(default_factory=list)
    page: int = 1
    source_url: str = ''

    @property
    def has_next_page(self) -> bool:
        # The site exposes no page count; an empty page means we ran past the end.
        return len(self.anime_list) > 0

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next_page else None

    def to_dict(self) -> dict:
        return {'anime_list': [a.to_dict() for a in self.anime_list]}

    def pagination_meta(self) -> dict:
        return {
            'current_page': self.page,
            'total_items': len(self.anime_list),
            'source_url': self.source_url,
            'has_next_page': self.has_next_page,
            'next_page': self.next_page,
        }


@dataclass
class AnimeListResult:
    """The full alphabetical catalog."""
    anime_list: List[AnimeListEntry] = field(default_factory=list)
    source_url: str = ''

    def to_dict(self) -> dict:
        return {'anime_list': [a.to_dict() for a in self.anime_list]}


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

@dataclass
class Envelope:
    """Uniform wrapper for every JSON response body."""
    status: str
    message: str
    data: Optional[Any] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'status': self.status,
            'message': self.message,
            'data': self.data,
            'meta': dict(self.meta),
        }
