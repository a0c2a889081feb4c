"""
Grouping and search over the full anime list.
"""

from __future__ import annotations

from typing import Dict, List

from api.models import AnimeListEntry


def group_by_letter(entries: List[AnimeListEntry]) -> Dict[str, List[dict]]:
    """Bucket entries by their ``letter``.

    Letters appear in first-seen order and entries keep their input order.
    Grouped items do not repeat the ``letter`` key.
    """
    grouped: Dict[str, List[dict]] = {}
    for entry in entries:
        grouped.setdefault(entry.letter, []).append(entry.to_grouped_dict())
    return grouped


def normalize_query(raw_query: str) -> str:
    return (raw_query or '').lower().strip()


def _is_exact_match(entry: AnimeListEntry, query: str) -> bool:
    return entry.title.lower() == query or entry.id.lower() == query


def search_anime(entries: List[AnimeListEntry], query: str) -> List[AnimeListEntry]:
    """Substring search over title and id, ranked by relevance.

    *query* is expected to be normalised already (see ``normalize_query``).
    Exact title/id matches come first in input order; the remaining matches
    follow by ascending title length.  The sort is stable, so ties keep
    their input order.
    """
    matches = [
        entry for entry in entries
        if query in entry.title.lower() or query in entry.id.lower()
    ]

    def rank(entry: AnimeListEntry):
        if _is_exact_match(entry, query):
            return (0, 0)
        return (1, len(entry.title))

    return sorted(matches, key=rank)
