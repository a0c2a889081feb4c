"""
Declarative selector paths for every Otakudesu page we read.

Each descriptor records where the rows live and how to read each raw field
from a row.  When the site markup changes, this is the only file that should
need editing; ``tests/test_api_parsers.py`` checks the descriptors against
saved HTML snippets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSelector:
    """Reads one raw string from a row.

    ``selector`` is a CSS path relative to the row (empty means the row
    itself).  When ``attr`` is set the attribute value is read, otherwise
    the node text.  Missing nodes or attributes read as ``''``.

    The first match is read unless ``last`` is set, in which case the last
    match wins (card anchors: a row with two ``.thumb > a`` links reports
    the second one).
    """
    selector: str
    attr: Optional[str] = None
    last: bool = False

    def _node(self, row: Tag) -> Optional[Tag]:
        if not self.selector:
            return row
        if self.last:
            matches = row.select(self.selector)
            return matches[-1] if matches else None
        return row.select_one(self.selector)

    def read(self, row: Tag) -> str:
        node = self._node(row)
        if node is None:
            return ''
        if self.attr:
            value = node.get(self.attr, '')
            if isinstance(value, list):
                value = ' '.join(value)
            return value or ''
        return node.get_text()


@dataclass(frozen=True)
class ListingDescriptor:
    """Rows inside the ``block_index``-th child block of ``container``.

    Child blocks are the direct element children of every ``container``
    match, in document order.  A block index past the end yields no rows.
    """
    name: str
    container: str
    block_index: int
    row: str
    fields: Mapping[str, FieldSelector]

    def select_rows(self, soup: BeautifulSoup) -> List[Tag]:
        blocks = []
        for container in soup.select(self.container):
            blocks.extend(container.find_all(True, recursive=False))
        if self.block_index >= len(blocks):
            logger.debug(f"[{self.name}] block {self.block_index} not found ({len(blocks)} blocks)")
            return []
        return blocks[self.block_index].select(self.row)

    def extract(self, soup: BeautifulSoup) -> List[Dict[str, str]]:
        return [read_fields(row, self.fields) for row in self.select_rows(soup)]


@dataclass(frozen=True)
class GroupedListDescriptor:
    """Rows split into labelled grouping blocks (one per letter)."""
    name: str
    group: str
    label: FieldSelector
    row: str
    fields: Mapping[str, FieldSelector]

    def extract(self, soup: BeautifulSoup) -> List[Dict[str, str]]:
        """Return raw rows, each with the enclosing block label under ``label``."""
        records = []
        for block in soup.select(self.group):
            label = self.label.read(block)
            for row in block.select(self.row):
                fields = read_fields(row, self.fields)
                fields['label'] = label
                records.append(fields)
        return records


def read_fields(row: Tag, fields: Mapping[str, FieldSelector]) -> Dict[str, str]:
    """Apply every field selector to *row*."""
    return {name: selector.read(row) for name, selector in fields.items()}


# ---------------------------------------------------------------------------
# Listing cards (homepage, complete-anime, ongoing-anime)
# ---------------------------------------------------------------------------

# ``extra`` is the day of the week on ongoing cards and the score on
# completed cards; both sit in ``.epztipe``.
CARD_FIELDS = {
    'title': FieldSelector('.thumb > a .thumbz > h2', last=True),
    'thumb': FieldSelector('.thumb > a .thumbz > img', 'src', last=True),
    'link': FieldSelector('.thumb > a', 'href', last=True),
    'uploaded_on': FieldSelector('.newnime'),
    'episode': FieldSelector('.epz'),
    'extra': FieldSelector('.epztipe'),
}

HOME_ONGOING = ListingDescriptor(
    name='home.on_going',
    container='.venz',
    block_index=0,
    row='ul > li',
    fields=CARD_FIELDS,
)

HOME_COMPLETE = ListingDescriptor(
    name='home.complete',
    container='.venz',
    block_index=1,
    row='ul > li',
    fields=CARD_FIELDS,
)

COMPLETE_PAGE = ListingDescriptor(
    name='complete-anime',
    container='.venz',
    block_index=0,
    row='ul > li',
    fields=CARD_FIELDS,
)

ONGOING_PAGE = ListingDescriptor(
    name='ongoing-anime',
    container='.venz',
    block_index=0,
    row='ul > li',
    fields=CARD_FIELDS,
)


# ---------------------------------------------------------------------------
# Full alphabetical list
# ---------------------------------------------------------------------------

ANIME_LIST = GroupedListDescriptor(
    name='anime-list',
    group='.bariskelom',
    label=FieldSelector('.barispenz a'),
    row='.jdlbar ul li',
    fields={
        'title': FieldSelector('a'),
        'link': FieldSelector('a', 'href'),
        'full_title': FieldSelector('a', 'title'),
    },
)
