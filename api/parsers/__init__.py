"""
Otakudesu HTML parsers – public API.

Usage::

    from api.parsers import parse_home_page, parse_anime_list
    from api.parsers import parse_complete_page, parse_ongoing_page
"""

from api.parsers.home_parser import (
    parse_home_page,
    parse_complete_page,
    parse_ongoing_page,
)
from api.parsers.list_parser import parse_anime_list
from api.parsers.common import (
    load_document,
    derive_anime_id,
    parse_score,
    build_listing_url,
)

__all__ = [
    'parse_home_page',
    'parse_complete_page',
    'parse_ongoing_page',
    'parse_anime_list',
    'load_document',
    'derive_anime_id',
    'parse_score',
    'build_listing_url',
]
