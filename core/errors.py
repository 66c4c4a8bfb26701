"""Error taxonomy shared by the viewer core and the HTTP layer."""


class ViewerError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ViewerError):
    """Unknown test, session or question."""

    status_code = 404
    default_message = "Test not found"


class UpstreamFailure(ViewerError):
    """The CMS or the model provider answered with a non-success."""

    status_code = 500
    default_message = "Upstream service failed"


class ValidationFailure(ViewerError):
    """A request is missing data that is required to serve it."""

    status_code = 400
    default_message = "Invalid request"
