import asyncio
import logging
import re
from contextlib import nullcontext
from typing import Optional
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup
from bs4.element import Tag

from errors import EmptyOrPrivate, FetchFailed, InvalidInput, PageNotFound, SubjectNotFound
from models import Film, RawEntry, WatchlistResult

logger = logging.getLogger(__name__)

LETTERBOXD_BASE = "https://letterboxd.com"
DEFAULT_USER_AGENT = "Mozilla/5.0"
DEFAULT_TIMEOUT = 10.0

_LABEL_RE = re.compile(r"(.+?)\s*\(([0-9]{4})\)")
_PAGE_HREF_RE = re.compile(r"/watchlist/page/([0-9]+)/")


def watchlist_url(base_url: str, username: str, page: int = 1) -> str:
    """Listing URL for one page of a user's watchlist. Page 1 has no /page/ suffix."""
    url = f"{base_url.rstrip('/')}/{quote(username, safe='')}/watchlist/"
    if page > 1:
        url += f"page/{page}/"
    return url


async def fetch_page(client: httpx.AsyncClient, url: str) -> str:
    """GET one listing page. Raises PageNotFound on 404, FetchFailed on anything else."""
    try:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning("GET %s returned %d", url, exc.response.status_code)
        if exc.response.status_code == 404:
            raise PageNotFound(url) from exc
        raise FetchFailed() from exc
    except httpx.HTTPError as exc:
        logger.warning("GET %s failed: %r", url, exc)
        raise FetchFailed() from exc
    return response.text


def extract_raw_entry(node: Tag) -> Optional[RawEntry]:
    """Read the poster data attributes off a node, or None if it is not a poster."""
    if node.get("data-component-class") != "LazyPoster":
        return None
    return RawEntry(
        item_name=node.get("data-item-name"),
        slug=node.get("data-item-slug"),
        link=node.get("data-item-link"),
    )


def to_film(raw: RawEntry) -> Film:
    label = raw.item_name or ""
    match = _LABEL_RE.fullmatch(label)
    if match:
        title, year = match.group(1).strip(), match.group(2)
    else:
        title, year = label, ""
    return Film(title=title, year=year, slug=raw.slug or "", link=raw.link or "")


def parse_entries(html: str) -> list[Film]:
    """Films on one listing page, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    films: list[Film] = []
    for node in soup.select("div[data-component-class]"):
        raw = extract_raw_entry(node)
        if raw is not None:
            films.append(to_film(raw))
    return films


def parse_last_page(html: str) -> int:
    """Highest page number linked from the pagination, 1 when there is none."""
    soup = BeautifulSoup(html, "html.parser")
    last_page = 1
    for anchor in soup.select('a[href*="/watchlist/page/"]'):
        match = _PAGE_HREF_RE.search(anchor.get("href") or "")
        if match:
            last_page = max(last_page, int(match.group(1)))
    return last_page


async def _fetch_remaining(
    client: httpx.AsyncClient, urls: list[str], max_concurrency: Optional[int]
) -> list[str]:
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else nullcontext()

    async def fetch_one(url: str) -> str:
        async with limiter:
            return await fetch_page(client, url)

    # Every fetch settles before we look at the results; nothing is cancelled.
    results = await asyncio.gather(*(fetch_one(url) for url in urls), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


async def acquire_watchlist(
    username: str,
    *,
    base_url: str = LETTERBOXD_BASE,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
    max_concurrency: Optional[int] = None,
) -> WatchlistResult:
    """Fetch every page of a public watchlist and return its films in page order.

    Raises InvalidInput, SubjectNotFound, FetchFailed or EmptyOrPrivate. A single
    failed page fails the whole call; partial results are never returned.
    """
    username = (username or "").strip()
    if not username:
        raise InvalidInput()

    async with httpx.AsyncClient(headers={"User-Agent": user_agent}, timeout=timeout) as client:
        logger.info("Fetching watchlist for user: %s", username)
        try:
            first_page = await fetch_page(client, watchlist_url(base_url, username))
        except PageNotFound as exc:
            raise SubjectNotFound(username) from exc

        films = parse_entries(first_page)
        last_page = parse_last_page(first_page)
        logger.info("Watchlist for %s spans %d page(s)", username, last_page)

        if last_page > 1:
            urls = [watchlist_url(base_url, username, page) for page in range(2, last_page + 1)]
            for html in await _fetch_remaining(client, urls, max_concurrency):
                films.extend(parse_entries(html))

    if not films:
        raise EmptyOrPrivate(username)

    logger.info("Fetched %d films for %s", len(films), username)
    return films
