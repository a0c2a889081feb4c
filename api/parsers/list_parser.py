"""
Parser for the full alphabetical anime list (``/anime-list/``).
"""

from __future__ import annotations

import logging

from api.models import AnimeListEntry, AnimeListResult
from api.parsers.common import load_document, clean_text, derive_anime_id
from api.parsers.selectors import ANIME_LIST

logger = logging.getLogger(__name__)


def parse_anime_list(html_content: str, base_url: str, source_url: str = '') -> AnimeListResult:
    """Parse every letter block into ``AnimeListEntry`` rows.

    Rows without a link or a visible title are skipped.  ``full_title``
    falls back to the visible title when the link has no ``title``
    attribute.
    """
    soup = load_document(html_content)
    entries = []
    skipped = 0

    for raw in ANIME_LIST.extract(soup):
        link = raw['link']
        title = clean_text(raw['title'])
        if not link or not title:
            skipped += 1
            continue
        entries.append(AnimeListEntry(
            title=title,
            full_title=raw['full_title'] or title,
            id=derive_anime_id(link, base_url),
            link=link,
            letter=clean_text(raw['label']),
        ))

    if skipped:
        logger.debug('[Anime list] Skipped %d rows without link or title', skipped)
    logger.debug('[Anime list] Parsed %d entries', len(entries))
    return AnimeListResult(anime_list=entries, source_url=source_url)
