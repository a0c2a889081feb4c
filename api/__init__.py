"""
Otakudesu API – API Layer.

This package provides structured parsing of Otakudesu HTML pages and a thin
FastAPI REST interface for use by front-end applications.

Quick start (Python)::

    from api.parsers import parse_home_page, parse_anime_list
    from api.models import AnimeSummary, AnimeListEntry

Quick start (REST)::

    uvicorn api.server:app --reload
"""

from api.models import (
    AnimeSummary,
    AnimeListEntry,
    HomePageResult,
    ListingPageResult,
    AnimeListResult,
    Envelope,
)
from api.parsers import (
    parse_home_page,
    parse_complete_page,
    parse_ongoing_page,
    parse_anime_list,
)

__all__ = [
    # Models
    'AnimeSummary',
    'AnimeListEntry',
    'HomePageResult',
    'ListingPageResult',
    'AnimeListResult',
    'Envelope',
    # Parsers
    'parse_home_page',
    'parse_complete_page',
    'parse_ongoing_page',
    'parse_anime_list',
]
