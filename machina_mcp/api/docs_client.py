"""Client for the Machina documentation website."""

import aiohttp
from loguru import logger

from machina_mcp.api.http_utils import FetchError
from machina_mcp.config import get_settings


def docs_url(page: str) -> str:
    """Build the documentation URL for a page or section slug."""
    base = get_settings().docs_base_url.rstrip("/")
    return f"{base}/{page.strip('/')}"


async def fetch_docs_page(page: str = "introduction") -> str:
    """Fetch the raw HTML of a documentation page.

    Args:
        page: Page or section slug (e.g., "introduction", "agents")

    Returns:
        str: Page HTML

    Raises:
        FetchError: On any non-2xx response
    """
    settings = get_settings()
    url = docs_url(page)
    headers = {"User-Agent": settings.user_agent}
    timeout = aiohttp.ClientTimeout(total=settings.http_timeout_seconds)

    logger.debug(f"GET {url}")
    async with aiohttp.ClientSession(timeout=timeout, trust_env=True) as session:
        async with session.get(url, headers=headers) as response:
            if 200 <= response.status < 300:
                return await response.text()
            reason = response.reason or f"HTTP {response.status}"
            raise FetchError(
                f"Failed to fetch documentation: {reason}", status=response.status, url=url
            )
