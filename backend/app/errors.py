"""
Application error taxonomy.

Each error carries the status code and the generic message sent to the
client. The handlers in ``app.main`` render them as ``{detail_key: detail}``;
anything more specific goes to the log only.
"""


class AppError(RuntimeError):
    status_code: int = 500
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None, *, detail_key: str = "message", log_message: str | None = None):
        self.detail = detail or self.default_detail
        self.detail_key = detail_key
        self.log_message = log_message or self.detail
        super().__init__(self.log_message)


class ValidationError(AppError):
    """A required field is missing."""
    status_code = 400
    default_detail = "Missing required fields!"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class PersistenceError(AppError):
    """Document store read/write failure."""
    status_code = 500
    default_detail = "Internal Server Error"


class UpstreamCallError(AppError):
    """The attachment / message persistence service failed or was unreachable."""
    status_code = 500
    default_detail = "Upload failed"
