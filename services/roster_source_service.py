"""
Suggested player names from a web member list.

Scrapes the configured member-list page, caches the names in memory, and falls
back to the stale cache or the preset list when the page cannot be fetched.
"""

from __future__ import annotations

import html
import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import requests

from services.interfaces import IRosterSource

logger = logging.getLogger("party_wheel.services.roster_source")

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Member entries only; activity feeds and rankings on the same page are skipped
MEMBER_ENTRY_PATTERN = re.compile(
    r'<li class="entry">.*?<a[^>]+href="/lodestone/character/\d+/"[^>]*>'
    r'.*?<p class="entry__name">([^<]+)</p>',
    re.DOTALL,
)
LOOSE_ENTRY_PATTERN = re.compile(
    r'<li class="entry">.*?<p class="entry__name">([^<]+)</p>',
    re.DOTALL,
)


@dataclass
class RosterFetch:
    """
    Outcome of a name fetch.

    Attributes:
        names: Suggested names, in page order without duplicates
        cached: Served from the in-memory cache
        stale: The cache had expired; served because the fetch failed
        fallback: Served from the preset list because nothing else was available
        error: Why the fetch failed, if it did
        fetched_at: Unix time the names were scraped (None for presets)
    """

    names: list[str] = field(default_factory=list)
    cached: bool = False
    stale: bool = False
    fallback: bool = False
    error: str | None = None
    fetched_at: float | None = None

    @property
    def count(self) -> int:
        return len(self.names)


def parse_member_names(page: str) -> list[str]:
    """Extract unique member names from a member-list page."""
    names = _collect(MEMBER_ENTRY_PATTERN, page)
    if not names:
        names = _collect(LOOSE_ENTRY_PATTERN, page)
    return names


def _collect(pattern: re.Pattern, page: str) -> list[str]:
    seen: dict[str, None] = {}
    for raw in pattern.findall(page):
        name = html.unescape(raw.strip())
        if name:
            seen.setdefault(name, None)
    return list(seen)


class RosterSourceService(IRosterSource):
    """Fetches and caches suggested names. fetch_names never raises."""

    def __init__(
        self,
        url: str,
        cache_seconds: int = 7200,
        fallback_names: list[str] | None = None,
        timeout: float = 10.0,
        session=None,
        clock: Callable[[], float] = time.time,
    ):
        self.url = url
        self.cache_seconds = cache_seconds
        self.fallback_names = list(fallback_names or [])
        self.timeout = timeout
        self.session = session or requests
        self.clock = clock
        self._cached_names: list[str] | None = None
        self._cached_at: float | None = None

    def _cache_is_fresh(self, now: float) -> bool:
        return self._cached_names is not None and now - self._cached_at < self.cache_seconds

    def fetch_names(self) -> RosterFetch:
        now = self.clock()
        if self._cache_is_fresh(now):
            logger.debug(f"Roster cache hit: {len(self._cached_names)} names")
            return RosterFetch(names=list(self._cached_names), cached=True, fetched_at=self._cached_at)

        logger.info(f"Roster cache miss, fetching {self.url}")
        try:
            names = self._download()
        except (requests.RequestException, ValueError) as exc:
            return self._fallback(str(exc))

        self._cached_names = names
        self._cached_at = now
        logger.info(f"Roster cache updated: {len(names)} names")
        return RosterFetch(names=list(names), fetched_at=now)

    def _download(self) -> list[str]:
        if not self.url:
            raise ValueError("No roster source URL configured")
        response = self.session.get(self.url, headers={"User-Agent": USER_AGENT}, timeout=self.timeout)
        response.raise_for_status()
        return parse_member_names(response.text)

    def _fallback(self, error: str) -> RosterFetch:
        if self._cached_names is not None:
            logger.warning(f"Roster fetch failed, serving stale cache: {error}")
            return RosterFetch(
                names=list(self._cached_names),
                cached=True,
                stale=True,
                error=error,
                fetched_at=self._cached_at,
            )
        logger.warning(f"Roster fetch failed, using {len(self.fallback_names)} preset names: {error}")
        return RosterFetch(names=list(self.fallback_names), fallback=True, error=error)

    def clear_cache(self) -> None:
        self._cached_names = None
        self._cached_at = None
