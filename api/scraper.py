"""
Fetch-and-parse orchestration for each Otakudesu page type.

``OtakudesuScraper`` owns a ``RequestHandler`` and knows which URL each page
lives at; parsing is delegated to ``api.parsers``.
"""

from __future__ import annotations

import logging
from typing import Optional

from api.models import HomePageResult, ListingPageResult, AnimeListResult
from api.parsers import (
    parse_home_page,
    parse_complete_page,
    parse_ongoing_page,
    parse_anime_list,
    build_listing_url,
)
from utils.request_handler import RequestHandler

logger = logging.getLogger(__name__)


class OtakudesuScraper:
    """Scrapes one page per call; nothing is cached between calls.

    Build one per client request and ``close()`` it afterwards.
    """

    COMPLETE_SECTION = 'complete-anime'
    ONGOING_SECTION = 'ongoing-anime'
    ANIME_LIST_SECTION = 'anime-list'

    def __init__(self, request_handler: Optional[RequestHandler] = None):
        self.request_handler = request_handler or RequestHandler()

    @property
    def base_url(self) -> str:
        return self.request_handler.config.base_url

    def anime_list_url(self) -> str:
        return f'{self.base_url}{self.ANIME_LIST_SECTION}/'

    def complete_page_url(self, page: int) -> str:
        return build_listing_url(self.base_url, self.COMPLETE_SECTION, page)

    def ongoing_page_url(self, page: int) -> str:
        return build_listing_url(self.base_url, self.ONGOING_SECTION, page)

    def fetch_home(self) -> HomePageResult:
        html = self.request_handler.fetch_html(self.base_url)
        return parse_home_page(html, self.base_url)

    def fetch_complete_page(self, page: int) -> ListingPageResult:
        url = self.complete_page_url(page)
        html = self.request_handler.fetch_html(url)
        return parse_complete_page(html, self.base_url, page, source_url=url)

    def fetch_ongoing_page(self, page: int) -> ListingPageResult:
        url = self.ongoing_page_url(page)
        html = self.request_handler.fetch_html(url)
        return parse_ongoing_page(html, self.base_url, page, source_url=url)

    def fetch_anime_list(self) -> AnimeListResult:
        url = self.anime_list_url()
        html = self.request_handler.fetch_html(url)
        result = parse_anime_list(html, self.base_url, source_url=url)
        logger.info(f"Anime list: {len(result.anime_list)} entries from {url}")
        return result

    def close(self):
        self.request_handler.close()
