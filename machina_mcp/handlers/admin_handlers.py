"""Admin and system management handlers for MCP tools."""

from typing import Dict

from machina_mcp.api import response_cache
from machina_mcp.config import get_settings


async def handle_get_api_status(arguments: Dict) -> Dict:
    """Get upstream endpoints and cache status.

    Args:
        arguments: Empty dict (no arguments required)

    Returns:
        Dict with endpoints and cache statistics
    """
    settings = get_settings()
    return {
        "server": {
            "name": settings.mcp_server_name,
            "version": settings.mcp_server_version,
        },
        "endpoints": {
            "docs": settings.docs_base_url,
            "templates": settings.templates_api_url,
            "github_authenticated": bool(settings.github_token),
        },
        "cache": response_cache.get_stats(),
    }


async def handle_clear_cache(arguments: Dict) -> Dict:
    """Clear the upstream response cache.

    Args:
        arguments: Optional 'pattern' to clear specific cache entries

    Returns:
        Status dict confirming cache clear
    """
    pattern = arguments.get("pattern")
    removed = await response_cache.clear(pattern)
    suffix = f" for pattern: {pattern}" if pattern else " completely"
    return {
        "status": "success",
        "message": f"Cache cleared{suffix}",
        "removed": removed,
    }
