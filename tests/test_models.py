from errors import EmptyOrPrivate, FetchFailed, InvalidInput, PageNotFound, SubjectNotFound, WatchlistError
from models import ErrorResponse, Film, PickResponse


def test_film_defaults():
    film = Film(title="Oppenheimer")
    assert film.year == ""
    assert film.slug == ""
    assert film.link == ""


def test_pick_response_without_poster():
    film = Film(title="Dune", year="2021", slug="dune-2021", link="/film/dune-2021/")
    response = PickResponse(username="floxd", count=1, film=film)
    assert response.poster_url is None
    assert response.film.slug == "dune-2021"


def test_error_codes_are_distinct():
    errors = [InvalidInput(), SubjectNotFound("floxd"), FetchFailed(), EmptyOrPrivate("floxd")]
    assert all(isinstance(e, WatchlistError) for e in errors)
    assert len({e.code for e in errors}) == 4


def test_page_not_found_is_a_fetch_failure():
    error = PageNotFound("https://letterboxd.com/floxd/watchlist/page/2/")
    assert isinstance(error, FetchFailed)
    assert error.code == "fetch_failed"
    assert error.message == "Failed to fetch watchlist. Please try again."


def test_error_response_from_error():
    error = SubjectNotFound("nobody")
    body = ErrorResponse(error=error.code, message=error.message)
    assert body.model_dump() == {
        "error": "subject_not_found",
        "message": 'User "nobody" not found on Letterboxd.',
    }
