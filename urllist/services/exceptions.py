"""Custom exception hierarchy for the service layer"""


class ServiceError(Exception):
    """Base exception for all service-related errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Raised when input validation fails"""
    def __init__(self, message: str = "Invalid input provided", error_code: str = "VALIDATION_ERROR"):
        super().__init__(message, error_code)


class InvalidURLError(ValidationError):
    """Raised when a string cannot be parsed as an http(s) URL"""
    def __init__(self, url: str = "", message: str = None):
        if message is None:
            message = f"Invalid URL: {url}" if url else "Invalid URL provided"
        super().__init__(message, "INVALID_URL")
        self.url = url


class FetchError(ServiceError):
    """Raised when fetching content from URL fails"""
    def __init__(self, message: str = "Failed to fetch content from URL", error_code: str = "FETCH_ERROR"):
        super().__init__(message, error_code)


class UnsafeURLError(FetchError):
    """Raised when a URL targets a loopback or private network host"""
    def __init__(self, url: str = ""):
        super().__init__(f"Refusing to fetch private or loopback address: {url}", "UNSAFE_URL")
        self.url = url


class HTTPFetchError(FetchError):
    """Raised when the remote server answers with a non-success status"""
    def __init__(self, status_code: int, message: str = None):
        if message is None:
            message = f"HTTP request failed with status code {status_code}"
        super().__init__(message, "HTTP_ERROR")
        self.status_code = status_code


class FetchTimeoutError(FetchError, TimeoutError):
    """Raised when the remote server does not answer within the fetch timeout"""
    def __init__(self, timeout: float = None):
        message = f"Request timed out after {timeout} seconds" if timeout else "Request timed out"
        super().__init__(message, "TIMEOUT_ERROR")
        self.timeout = timeout


class NetworkError(FetchError):
    """Raised on transport-level failures (DNS, connection refused, TLS, ...)"""
    def __init__(self, message: str = "Network error while fetching URL"):
        super().__init__(message, "NETWORK_ERROR")


class UnsupportedContentTypeError(FetchError):
    """Raised when content type is not supported"""
    def __init__(self, content_type: str):
        message = f"Content type '{content_type}' is not supported"
        super().__init__(message, "CONTENT_ERROR")
        self.content_type = content_type
