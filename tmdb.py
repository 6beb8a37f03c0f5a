import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

TMDB_BASE = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p"
DEFAULT_POSTER_TIMEOUT = 5.0


class PosterClient:
    """Best-effort poster lookup against the TMDB search API.

    Without an API key every lookup returns None and no request is made.
    Errors of any kind are logged and reported as "no poster".
    """

    def __init__(self, api_key: Optional[str], timeout: float = DEFAULT_POSTER_TIMEOUT):
        self.api_key = api_key
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def poster_url(self, title: str, year: str = "") -> Optional[str]:
        """URL of the first search result's poster, or None."""
        if not self.enabled:
            return None

        params = {"api_key": self.api_key, "query": title}
        if year:
            params["year"] = year

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{TMDB_BASE}/search/movie", params=params)
            response.raise_for_status()
            results = response.json().get("results") or []
            poster_path = results[0].get("poster_path") if results else None
        except (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError) as exc:
            logger.warning("Poster lookup failed for %r (%s): %r", title, year, exc)
            return None

        if not poster_path:
            logger.debug("No poster found for %r (%s)", title, year)
            return None
        return f"{TMDB_IMAGE_BASE}/w500{poster_path}"
