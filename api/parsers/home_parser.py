"""
Homepage and paginated listing parsers.

Every card page on the site shares the same markup: a ``.venz`` container
whose child blocks hold ``ul > li`` cards.  Which block is read, and whether
``.epztipe`` holds a day or a score, is decided by the caller.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from api.models import AnimeSummary, HomePageResult, ListingPageResult
from api.parsers.common import (
    load_document,
    clean_text,
    strip_space_token,
    parse_score,
    derive_anime_id,
)
from api.parsers.selectors import (
    ListingDescriptor,
    HOME_ONGOING,
    HOME_COMPLETE,
    COMPLETE_PAGE,
    ONGOING_PAGE,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _build_summary(raw: Dict[str, str], base_url: str) -> AnimeSummary:
    link = raw.get('link', '')
    return AnimeSummary(
        title=clean_text(raw.get('title')),
        id=derive_anime_id(link, base_url),
        thumb=raw.get('thumb', ''),
        episode=strip_space_token(raw.get('episode')),
        uploaded_on=clean_text(raw.get('uploaded_on')),
        link=link,
    )


def _parse_ongoing_cards(soup, descriptor: ListingDescriptor, base_url: str) -> List[AnimeSummary]:
    cards = []
    for raw in descriptor.extract(soup):
        summary = _build_summary(raw, base_url)
        summary.day_updated = strip_space_token(raw.get('extra'))
        cards.append(summary)
    return cards


def _parse_complete_cards(soup, descriptor: ListingDescriptor, base_url: str) -> List[AnimeSummary]:
    cards = []
    for raw in descriptor.extract(soup):
        summary = _build_summary(raw, base_url)
        summary.score = parse_score(strip_space_token(raw.get('extra')))
        cards.append(summary)
    return cards


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_home_page(html_content: str, base_url: str) -> HomePageResult:
    """Parse the homepage into its ongoing and completed blocks.

    The first ``.venz`` block is read as ongoing and the second as completed.
    There is no marker in the markup telling them apart, so a reordering on
    the site would swap the two lists.
    """
    soup = load_document(html_content)
    on_going = _parse_ongoing_cards(soup, HOME_ONGOING, base_url)
    complete = _parse_complete_cards(soup, HOME_COMPLETE, base_url)
    logger.debug('[Home] Parsed %d ongoing and %d complete entries', len(on_going), len(complete))
    return HomePageResult(on_going=on_going, complete=complete)


def parse_complete_page(html_content: str, base_url: str, page: int = 1,
                        source_url: str = '') -> ListingPageResult:
    """Parse one page of the completed-anime listing."""
    soup = load_document(html_content)
    cards = _parse_complete_cards(soup, COMPLETE_PAGE, base_url)
    if not cards:
        logger.info('[Complete page %d] No entries found', page)
    return ListingPageResult(anime_list=cards, page=page, source_url=source_url)


def parse_ongoing_page(html_content: str, base_url: str, page: int = 1,
                       source_url: str = '') -> ListingPageResult:
    """Parse one page of the ongoing-anime listing."""
    soup = load_document(html_content)
    cards = _parse_ongoing_cards(soup, ONGOING_PAGE, base_url)
    if not cards:
        logger.info('[Ongoing page %d] No entries found', page)
    return ListingPageResult(anime_list=cards, page=page, source_url=source_url)
