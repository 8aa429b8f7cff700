"""Template MCP tool handlers (browse, generate, validate)."""

from typing import Any, Dict, Optional

from loguru import logger

from machina_mcp.services import Notifier, browse_templates, generate_template, validate_template
from machina_mcp.utils.constants import CONTENT_TYPES, TEMPLATE_CATEGORIES


async def handle_browse_machina_templates(
    arguments: Dict, notify: Optional[Notifier] = None
) -> str:
    """Browse and suggest Machina templates and connectors.

    Args:
        arguments: Dict containing:
            - category: Template category (default: "all")
            - sport, use_case, language: Optional name filters
            - content_type: "templates", "connectors" or "both" (default)
            - fetch_content: Whether to download template/connector files
        notify: Optional progress notifier

    Returns:
        Suggestion text, or an error message
    """
    category = arguments.get("category") or "all"
    content_type = arguments.get("content_type") or "both"

    if category not in TEMPLATE_CATEGORIES:
        return f"Error browsing Machina templates: unknown category '{category}'"
    if content_type not in CONTENT_TYPES:
        return f"Error browsing Machina templates: unknown content_type '{content_type}'"

    try:
        return await browse_templates(
            category=category,
            sport=arguments.get("sport"),
            use_case=arguments.get("use_case"),
            language=arguments.get("language"),
            content_type=content_type,
            fetch_content=bool(arguments.get("fetch_content", False)),
            notify=notify,
        )
    except Exception as e:
        logger.error(f"Error browsing Machina templates: {e}")
        return f"Error browsing Machina templates: {e}"


async def handle_generate_machina_template(
    arguments: Dict, notify: Optional[Notifier] = None
) -> str:
    """Generate a template configuration with parameter placeholders filled in.

    Args:
        arguments: Dict containing:
            - name: Name of the new template (required)
            - sport, use_case, language: Optional overrides for inferred values
            - base_template: Existing repository template to start from
            - parameters: Values for "type: parameter" placeholders
            - output_format: "yaml" (default) or "json"
    """
    name = arguments.get("name")
    if not name:
        return "Error generating Machina template: name is required"

    output_format = arguments.get("output_format") or "yaml"
    if output_format not in ("yaml", "json"):
        return f"Error generating Machina template: unknown output_format '{output_format}'"

    try:
        return await generate_template(
            name,
            sport=arguments.get("sport"),
            use_case=arguments.get("use_case"),
            language=arguments.get("language"),
            base_template=arguments.get("base_template"),
            parameters=arguments.get("parameters"),
            output_format=output_format,
            notify=notify,
        )
    except Exception as e:
        logger.error(f"Error generating Machina template: {e}")
        return f"Error generating Machina template: {e}"


async def handle_validate_machina_template(arguments: Dict) -> Dict[str, Any]:
    """Validate a template configuration document.

    Args:
        arguments: Dict with 'content' (YAML text)

    Returns:
        Validation report dict, or a dict with an "error" message
    """
    content = arguments.get("content")
    if not content:
        return {"error": "content is required"}

    try:
        return validate_template(content)
    except Exception as e:
        logger.error(f"Error validating Machina template: {e}")
        return {"error": f"Error validating Machina template: {e}"}
