"""Upstream HTTP clients (docs website, GitHub contents API)."""

from .docs_client import docs_url, fetch_docs_page
from .github_client import fetch_file_content, fetch_repo_content
from .http_utils import FetchError, ResponseCache, response_cache

__all__ = [
    "fetch_docs_page",
    "docs_url",
    "fetch_repo_content",
    "fetch_file_content",
    "FetchError",
    "ResponseCache",
    "response_cache",
]
