import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from config import settings
from errors import WatchlistError
from models import ErrorResponse, PickResponse, PosterResponse, WatchlistResponse, WatchlistResult
from picker import pick_film
from scraper import acquire_watchlist
from tmdb import PosterClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def _acquire(username: str) -> WatchlistResult:
    return await acquire_watchlist(
        username,
        base_url=settings.letterboxd_base_url,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
        max_concurrency=settings.max_concurrency,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.posters = PosterClient(settings.tmdb_api_key, timeout=settings.poster_timeout)
    if not app.state.posters.enabled:
        logger.info("TMDB_API_KEY not set, posters disabled.")
    yield


app = FastAPI(lifespan=lifespan)


@app.exception_handler(WatchlistError)
async def watchlist_error_handler(request: Request, exc: WatchlistError):
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(error=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/watchlist/{username}", response_model=WatchlistResponse)
async def watchlist(username: str):
    films = await _acquire(username)
    return WatchlistResponse(username=username.strip(), count=len(films), films=films)


@app.get("/pick", response_model=PickResponse)
async def pick(request: Request, username: Optional[str] = None):
    if username is None:
        username = settings.default_username
    films = await _acquire(username)
    film = pick_film(films)
    poster_url = await request.app.state.posters.poster_url(film.title, film.year)
    return PickResponse(username=username.strip(), count=len(films), film=film, poster_url=poster_url)


@app.get("/poster", response_model=PosterResponse)
async def poster(request: Request, title: str, year: str = ""):
    return PosterResponse(poster_url=await request.app.state.posters.poster_url(title, year))
