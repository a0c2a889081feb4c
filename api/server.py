"""
Thin FastAPI REST layer over the Otakudesu scraper.

Run with::

    uvicorn api.server:app --reload --port 8100

or ``python -m api.server --port 8100``.
"""

import argparse
import logging
import re
from typing import Iterator

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.aggregator import group_by_letter, normalize_query, search_anime
from api.responses import format_response, error_response
from api.scraper import OtakudesuScraper
from utils.logging_config import setup_logging
from utils.request_handler import RequestHandler
from utils.settings import (
    load_request_config,
    API_HOST,
    API_PORT,
    API_LOG_FILE,
    LOG_LEVEL,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title='Otakudesu API',
    version='2.0',
    description='Unofficial REST API scraping the Otakudesu anime catalog.',
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_methods=['*'],
    allow_headers=['*'],
)


def get_scraper() -> Iterator[OtakudesuScraper]:
    """A fresh scraper, and HTTP session, for each client request."""
    scraper = OtakudesuScraper(RequestHandler(config=load_request_config()))
    try:
        yield scraper
    finally:
        scraper.close()


def _parse_page(raw: str) -> int:
    """Leading digits of the path segment; anything else (or 0) is page 1."""
    match = re.match(r'\s*(\d+)', raw or '')
    if not match:
        return 1
    return int(match.group(1)) or 1


def _error(message: str, exc: Exception, **extra_meta) -> JSONResponse:
    logger.error(f"{message}: {exc}")
    return JSONResponse(status_code=500, content=error_response(message, exc, **extra_meta))


# ---------------------------------------------------------------------------
# Request / response schemas (Pydantic models for FastAPI validation)
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = 'ok'


class NotFoundResponse(BaseModel):
    status: str = 'not found'
    message: str = 'Endpoint not found. See / for the list of available endpoints.'


ENDPOINTS = {
    'home': '/api/home',
    'complete': '/api/complete/page/:page',
    'ongoing': '/api/ongoing/page/:page',
    'animeList': '/api/anime-list',
    'search': '/api/search/:query',
    'health': '/api/health',
}


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content=NotFoundResponse().model_dump())
    return JSONResponse(
        status_code=exc.status_code,
        content={'status': 'error', 'message': str(exc.detail)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc: Exception):
    logger.error(f"Error: {exc}")
    return JSONResponse(status_code=500, content={'status': 'error', 'message': str(exc)})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get('/')
def root():
    """Service descriptor with the endpoint map."""
    return {
        'message': 'Welcome To Unofficial Otakudesu REST API',
        'version': app.version,
        'endpoints': ENDPOINTS,
    }


@app.get('/api/health', response_model=HealthResponse)
def health_check():
    """Simple liveness check."""
    return HealthResponse()


@app.get('/api/home')
def api_home(scraper: OtakudesuScraper = Depends(get_scraper)):
    """Ongoing and completed blocks of the homepage."""
    try:
        result = scraper.fetch_home()
    except Exception as exc:
        return _error('Failed to fetch homepage data', exc)
    return format_response(
        'success',
        'Homepage data retrieved successfully',
        result.to_dict(),
        {'source_url': scraper.base_url},
    )


@app.get('/api/complete')
def api_complete_redirect():
    return RedirectResponse(url='/api/complete/page/1', status_code=302)


@app.get('/api/complete/page/{page}')
def api_complete_page(page: str, scraper: OtakudesuScraper = Depends(get_scraper)):
    """One page of the completed-anime listing."""
    page_num = _parse_page(page)
    try:
        result = scraper.fetch_complete_page(page_num)
    except Exception as exc:
        return _error('Failed to fetch complete anime list', exc)
    return format_response(
        'success',
        'Complete anime list retrieved successfully',
        result.to_dict(),
        result.pagination_meta(),
    )


@app.get('/api/ongoing')
def api_ongoing_redirect():
    return RedirectResponse(url='/api/ongoing/page/1', status_code=302)


@app.get('/api/ongoing/page/{page}')
def api_ongoing_page(page: str, scraper: OtakudesuScraper = Depends(get_scraper)):
    """One page of the ongoing-anime listing."""
    page_num = _parse_page(page)
    try:
        result = scraper.fetch_ongoing_page(page_num)
    except Exception as exc:
        return _error('Failed to fetch ongoing anime list', exc)
    return format_response(
        'success',
        'Ongoing anime list retrieved successfully',
        result.to_dict(),
        result.pagination_meta(),
    )


@app.get('/api/anime-list')
def api_anime_list(scraper: OtakudesuScraper = Depends(get_scraper)):
    """Full alphabetical catalog, flat and grouped by letter."""
    try:
        result = scraper.fetch_anime_list()
    except Exception as exc:
        return _error('Failed to fetch anime list', exc, tip='Try again in a few moments')
    grouped = group_by_letter(result.anime_list)
    data = result.to_dict()
    data['grouped_by_letter'] = grouped
    return format_response(
        'success',
        'All anime list retrieved successfully',
        data,
        {
            'source_url': result.source_url,
            'total_anime': len(result.anime_list),
            'total_letters': len(grouped),
        },
    )


@app.get('/api/search/{query}')
def api_search(query: str, scraper: OtakudesuScraper = Depends(get_scraper)):
    """Substring search over the full catalog."""
    query = normalize_query(query)
    try:
        catalog = scraper.fetch_anime_list()
    except Exception as exc:
        return _error('Failed to search anime', exc, query=query)

    results = search_anime(catalog.anime_list, query)
    if results:
        message = f'Found {len(results)} anime matching "{query}"'
    else:
        message = f'No anime found matching "{query}"'
    return format_response(
        'success',
        message,
        {'search_results': [r.to_dict() for r in results]},
        {
            'query': query,
            'total_results': len(results),
            'total_anime_checked': len(catalog.anime_list),
        },
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run the Otakudesu REST API')
    parser.add_argument('--host', default=API_HOST, help='Interface to bind')
    parser.add_argument('--port', type=int, default=API_PORT, help='Port to listen on')
    parser.add_argument('--log-level', default=LOG_LEVEL, help='Logging level (DEBUG, INFO, ...)')
    parser.add_argument('--log-file', default=API_LOG_FILE, help='Optional log file path')
    args = parser.parse_args(argv)

    setup_logging(args.log_file, args.log_level)
    logger.info(f"Starting Otakudesu API on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == '__main__':
    main()
