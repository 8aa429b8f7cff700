"""Documentation MCP tool handlers."""

from typing import Dict, Optional

from loguru import logger

from machina_mcp.api import docs_url, fetch_docs_page
from machina_mcp.services import Notifier, emit
from machina_mcp.utils.html import extract_main_content, html_to_markdown, html_to_text


async def handle_get_machina_docs(arguments: Dict, notify: Optional[Notifier] = None) -> str:
    """Fetch a page from docs.machina.gg as plain text or Markdown.

    Args:
        arguments: Dict containing:
            - page: Page or section slug (default: "introduction")
            - format: "text" (default) or "markdown"
        notify: Optional progress notifier

    Returns:
        Documentation text, or an error message
    """
    page = arguments.get("page") or "introduction"
    output_format = arguments.get("format") or "text"

    try:
        await emit(notify, "info", f"Fetching documentation for {page} from docs.machina.gg...")

        url = docs_url(page)
        page_html = await fetch_docs_page(page)
        main_content = extract_main_content(page_html)

        if output_format == "markdown":
            content = html_to_markdown(main_content)
        else:
            content = html_to_text(main_content)

        return f"Documentation from {url}:\n\n{content}"
    except Exception as e:
        logger.error(f"Error fetching documentation: {e}")
        return f"Error fetching documentation: {e}"
