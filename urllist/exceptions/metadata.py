from .base import AppException, ErrorCode


class MissingURLException(AppException):
    """Raised when the url query parameter is absent or blank"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.MISSING_URL,
            message="URL is required",
            status_code=400
        )


class InvalidURLException(AppException):
    """Raised when the requested URL cannot be parsed"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.INVALID_URL,
            message="Invalid URL format",
            status_code=400,
            details={"url": url} if url else None
        )


class BatchSizeException(AppException):
    """Raised when a batch request is empty or too large"""

    def __init__(self, size: int, limit: int):
        message = "At least one URL is required" if size == 0 else f"At most {limit} URLs can be resolved at once"
        super().__init__(
            code=ErrorCode.BATCH_TOO_LARGE if size else ErrorCode.MISSING_URL,
            message=message,
            status_code=400,
            details={"size": size, "limit": limit}
        )
