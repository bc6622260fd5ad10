"""Services for teknify."""
from .api_client import HTTPUploadClient
from .reply import ReplyError, extract_url, interpret

__all__ = [
    "HTTPUploadClient",
    "ReplyError",
    "extract_url",
    "interpret",
]
