from typing import NamedTuple, Optional

from pydantic import BaseModel, Field


class RawEntry(NamedTuple):
    """Data attributes of one poster node, None where the attribute is absent."""

    item_name: Optional[str]
    slug: Optional[str]
    link: Optional[str]


class Film(BaseModel):
    title: str
    year: str = ""  # four digits, or "" when the label carries no year
    slug: str = ""
    link: str = ""


# Page-then-position order; callers treat it as an unordered pool.
WatchlistResult = list[Film]


class WatchlistResponse(BaseModel):
    username: str
    count: int
    films: list[Film] = Field(default_factory=list)


class PickResponse(BaseModel):
    username: str
    count: int
    film: Film
    poster_url: Optional[str] = None


class PosterResponse(BaseModel):
    poster_url: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    message: str
