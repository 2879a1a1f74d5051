"""Error hierarchy for the blog.

Every BlogError carries the HTTP status and the plain-text message the
client sees. Handlers raise; main.py turns them into responses.
"""


class BlogError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequest(BlogError):
    status_code = 400
    message = "Bad Request"


class InvalidCredentials(BlogError):
    status_code = 401
    message = "Invalid username or password"


class NotFound(BlogError):
    status_code = 404
    message = "404 page not found"


class UsernameTaken(BlogError):
    status_code = 409
    message = "Username already taken"


class HashingError(BlogError):
    message = "Failed to register"


class RenderError(BlogError):
    pass


class LoginRequired(Exception):
    """Raised by the auth gate; answered with a redirect to the login page."""

    def __init__(self, login_url: str = "/login"):
        super().__init__(login_url)
        self.login_url = login_url
