"""
Pytest configuration and fixtures for the Otakudesu API tests.
"""
import os
import sys

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from unittest.mock import MagicMock

import pytest
import tempfile
import shutil

BASE_URL = 'https://otakudesu.test/'


def make_response(status_code=200, text=''):
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = text.encode('utf-8')
    return response


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sleep_calls():
    """Records the delays passed to the handler's sleep function."""
    return []


@pytest.fixture
def fake_sleep(sleep_calls):
    return sleep_calls.append


def _card(slug, title, episode, extra, uploaded='', thumb=None):
    thumb = thumb or f'https://img.test/{slug}.jpg'
    return f'''
        <li>
            <div class="detpost">
                <div class="epz"><i class="fa fa-play"></i> {episode}</div>
                <div class="epztipe"><i class="fa fa-star"></i> {extra}</div>
                <div class="newnime">{uploaded}</div>
                <div class="thumb">
                    <a href="{BASE_URL}anime/{slug}/">
                        <div class="thumbz">
                            <img src="{thumb}" class="attachment-thumb">
                            <h2 class="jdlflm">{title}</h2>
                        </div>
                    </a>
                </div>
            </div>
        </li>'''


@pytest.fixture
def sample_home_html():
    """Homepage with 2 ongoing cards and 3 complete cards (one bad score)."""
    ongoing = (
        _card('one-piece-sub-indo', 'One Piece', 'Episode 1120', 'Minggu', '12 Okt')
        + _card('dandadan-s2-sub-indo', 'Dandadan Season 2', 'Episode 3', 'Kamis', '09 Okt')
    )
    complete = (
        _card('frieren-sub-indo', 'Sousou no Frieren', '28 Episode', '9.01', '30 Mar')
        + _card('naruto-sub-indo', 'Naruto', '220 Episode', '7.99', '01 Jan')
        + _card('mystery-sub-indo', 'Mystery Show', '12 Episode', '', '02 Feb')
    )
    return f'''
    <html>
    <head><title>Otakudesu</title></head>
    <body>
        <div class="venz">
            <div class="rapi"><ul>{ongoing}</ul></div>
            <div class="rapi"><ul>{complete}</ul></div>
        </div>
    </body>
    </html>
    '''


@pytest.fixture
def sample_complete_page_html():
    """A completed-anime listing page with two cards."""
    cards = (
        _card('bleach-sub-indo', 'Bleach', '366 Episode', '7.9', '01 Jan')
        + _card('kimetsu-sub-indo', 'Kimetsu no Yaiba', '26 Episode', '8.5', '02 Feb')
    )
    return f'''
    <html><body>
        <div class="venz"><ul>{cards}</ul></div>
    </body></html>
    '''


@pytest.fixture
def sample_ongoing_page_html():
    """An ongoing-anime listing page with one card."""
    cards = _card('one-piece-sub-indo', 'One Piece', 'Episode 1120', 'Minggu', '12 Okt')
    return f'''
    <html><body>
        <div class="venz"><ul>{cards}</ul></div>
    </body></html>
    '''


@pytest.fixture
def empty_listing_html():
    """A listing page past the last page of real data."""
    return '<html><body><div class="venz"><ul></ul></div></body></html>'


@pytest.fixture
def sample_anime_list_html():
    """Full list with three letter blocks and six valid rows.

    Two rows are malformed (no href / empty title) and must be skipped.
    """
    return f'''
    <html><body>
    <div id="abtext">
        <div class="bariskelom">
            <div class="barispenz"><a name="#">#</a></div>
            <div class="penzbar">
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/86-sub-indo/" title="86 Eighty Six">86</a>
                </li></ul></div>
            </div>
        </div>
        <div class="bariskelom">
            <div class="barispenz"><a name="N">N</a></div>
            <div class="penzbar">
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/naruto-shippuden-sub-indo/">Naruto Shippuden</a>
                </li></ul></div>
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/naruto-sub-indo/" title="Naruto (2002)">Naruto</a>
                </li></ul></div>
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/boruto-naruto-next-sub-indo/">Boruto: Naruto Next Generations</a>
                </li></ul></div>
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst">No Link Here</a>
                </li></ul></div>
            </div>
        </div>
        <div class="bariskelom">
            <div class="barispenz"><a name="O">O</a></div>
            <div class="penzbar">
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/one-piece-sub-indo/">One Piece</a>
                </li></ul></div>
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/overlord-sub-indo/">  Overlord  </a>
                </li></ul></div>
                <div class="jdlbar"><ul><li>
                    <a class="hodebgst" href="{BASE_URL}anime/blank-sub-indo/">   </a>
                </li></ul></div>
            </div>
        </div>
    </div>
    </body></html>
    '''
