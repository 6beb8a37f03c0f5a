class WatchlistError(Exception):
    """Base for every failure the acquisition pipeline surfaces to its caller."""

    code = "watchlist_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(WatchlistError):
    code = "invalid_input"
    status_code = 400

    def __init__(self, message: str = "Please enter a username."):
        super().__init__(message)


class SubjectNotFound(WatchlistError):
    code = "subject_not_found"
    status_code = 404

    def __init__(self, username: str):
        super().__init__(f'User "{username}" not found on Letterboxd.')
        self.username = username


class FetchFailed(WatchlistError):
    code = "fetch_failed"
    status_code = 502

    def __init__(self, message: str = "Failed to fetch watchlist. Please try again."):
        super().__init__(message)


class PageNotFound(FetchFailed):
    """HTTP 404 for a single listing page.

    Only a 404 on the first page means the user does not exist; on later
    pages it is handled like any other FetchFailed.
    """

    def __init__(self, url: str):
        super().__init__()
        self.url = url


class EmptyOrPrivate(WatchlistError):
    code = "empty_or_private"
    status_code = 404

    def __init__(self, username: str):
        super().__init__(f'Watchlist for "{username}" is empty or not public.')
        self.username = username
