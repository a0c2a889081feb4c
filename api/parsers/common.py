"""
Shared parsing utilities: document loading and field normalisation.
"""

from __future__ import annotations

import re
import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------

def load_document(html_content: str) -> BeautifulSoup:
    """Parse *html_content* with the lenient built-in parser.

    ``html.parser`` repairs unbalanced markup instead of raising, so any
    string (including an empty one) produces a queryable tree.
    """
    return BeautifulSoup(html_content or '', 'html.parser')


# ---------------------------------------------------------------------------
# Text clean-up
# ---------------------------------------------------------------------------

def clean_text(text: str) -> str:
    """Trim surrounding whitespace; ``None`` becomes ``''``."""
    return (text or '').strip()


def strip_space_token(text: str) -> str:
    """Remove the first literal space only, then trim.

    The site renders ``<i class="icon"></i> Episode 12``; dropping the one
    space after the icon keeps the inner spacing of the label intact.
    """
    return clean_text((text or '').replace(' ', '', 1))


# ---------------------------------------------------------------------------
# Score
# ---------------------------------------------------------------------------

_LEADING_FLOAT = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_score(text: str) -> float:
    """Parse the numeric prefix of *text* as a float.

    ``'7.82'`` and ``'7.82 / 10'`` give ``7.82``.  Text that does not start
    with a number (after leading whitespace) gives ``float('nan')``.
    """
    match = _LEADING_FLOAT.match((text or '').lstrip())
    if not match:
        logger.debug("Unparsable score text: %r", text)
        return float('nan')
    return float(match.group(0))


# ---------------------------------------------------------------------------
# Identifiers and URLs
# ---------------------------------------------------------------------------

def anime_url_prefix(base_url: str) -> str:
    return f'{base_url}anime/'


def derive_anime_id(link: str, base_url: str) -> str:
    """Derive the anime slug from a detail-page link.

    Removes the first ``<base_url>anime/`` and one trailing ``/``.  The result
    is not validated; an unexpected link gives an unexpected id.
    """
    if not link:
        return ''
    anime_id = link.replace(anime_url_prefix(base_url), '', 1)
    if anime_id.endswith('/'):
        anime_id = anime_id[:-1]
    return anime_id


def build_listing_url(base_url: str, section: str, page: int = 1) -> str:
    """URL of one page of a paginated section.

    Page 1 is the bare section URL; later pages append ``page/<n>``.
    """
    if page == 1:
        return f'{base_url}{section}/'
    return f'{base_url}{section}/page/{page}'
