from .base import AppException, ErrorCode
from .metadata import InvalidURLException, MissingURLException, BatchSizeException

__all__ = [
    "AppException",
    "ErrorCode",
    "InvalidURLException",
    "MissingURLException",
    "BatchSizeException",
]
