"""MCP tool handlers."""

from .admin_handlers import handle_clear_cache, handle_get_api_status
from .docs_handlers import handle_get_machina_docs
from .template_handlers import (
    handle_browse_machina_templates,
    handle_generate_machina_template,
    handle_validate_machina_template,
)

__all__ = [
    "handle_get_machina_docs",
    "handle_browse_machina_templates",
    "handle_generate_machina_template",
    "handle_validate_machina_template",
    "handle_get_api_status",
    "handle_clear_cache",
]
