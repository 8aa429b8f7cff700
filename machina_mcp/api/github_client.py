"""GitHub contents API client for the Machina templates repository."""

from typing import Any, Dict, List

import aiohttp
from loguru import logger

from machina_mcp.api.http_utils import FetchError, response_cache
from machina_mcp.config import get_settings

JSON_ACCEPT = "application/vnd.github.v3+json"
RAW_ACCEPT = "application/vnd.github.v3.raw"


def _headers(accept: str) -> Dict[str, str]:
    settings = get_settings()
    headers = {"Accept": accept, "User-Agent": settings.user_agent}
    if settings.github_token:
        headers["Authorization"] = f"Bearer {settings.github_token}"
    return headers


async def _get(url: str, accept: str, as_json: bool, error_prefix: str) -> Any:
    timeout = aiohttp.ClientTimeout(total=get_settings().http_timeout_seconds)

    logger.debug(f"GET {url}")
    async with aiohttp.ClientSession(timeout=timeout, trust_env=True) as session:
        async with session.get(url, headers=_headers(accept)) as response:
            if response.status == 200:
                if as_json:
                    return await response.json(content_type=None)
                return await response.text()
            reason = response.reason or f"HTTP {response.status}"
            raise FetchError(f"{error_prefix}: {reason}", status=response.status, url=url)


async def fetch_repo_content(path: str, use_cache: bool = True) -> List[Dict[str, Any]]:
    """List a directory of the templates repository.

    Args:
        path: Repository path (e.g., "agent-templates", "connectors/openai")
        use_cache: If True, will check cache before making API call

    Returns:
        list: Directory entries as returned by the contents API
            (name, path, type, download_url, ...)

    Raises:
        FetchError: On non-200 responses
    """
    cache_key = f"contents/{path}"
    if use_cache:
        cached = await response_cache.get(cache_key)
        if cached is not None:
            return cached

    url = f"{get_settings().templates_api_url}/contents/{path}"
    result = await _get(
        url, JSON_ACCEPT, as_json=True, error_prefix=f"Failed to fetch GitHub content for {path}"
    )

    # A file path yields a single object instead of a listing
    entries = result if isinstance(result, list) else [result]
    if use_cache:
        await response_cache.set(cache_key, entries)
    return entries


async def fetch_file_content(url: str, use_cache: bool = True) -> str:
    """Download a raw file, typically from an entry's ``download_url``.

    Raises:
        FetchError: On non-200 responses
    """
    if use_cache:
        cached = await response_cache.get(url)
        if cached is not None:
            return cached

    result = await _get(url, RAW_ACCEPT, as_json=False, error_prefix="Failed to fetch file content")

    if use_cache:
        await response_cache.set(url, result)
    return result
