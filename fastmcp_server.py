"""FastMCP server entry point for Machina documentation and template tooling.

Exposes the handlers in ``machina_mcp.handlers`` through the FastMCP
``@server.tool`` / ``@server.prompt`` / ``@server.resource`` decorators.
Runs over stdio by default; set ``MCP_TRANSPORT=http`` to serve HTTP.
"""

import json
import sys
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from fastmcp import Context, FastMCP
from loguru import logger

from machina_mcp.config import Settings, get_settings
from machina_mcp.handlers import (
    handle_browse_machina_templates,
    handle_clear_cache,
    handle_generate_machina_template,
    handle_get_api_status,
    handle_get_machina_docs,
    handle_validate_machina_template,
)
from machina_mcp.services import Notifier
from machina_mcp.utils.constants import (
    COMMON_SPORTS,
    COMMON_USE_CASES,
    CONTENT_TYPES,
    DOCS_SECTIONS,
    LANGUAGES,
    TEMPLATE_CATEGORIES,
)

load_dotenv()

API_INFO_URI = "https://docs.machina.gg/api-info"

server = FastMCP(
    name=get_settings().mcp_server_name,
    instructions=(
        "Machina sports-agent documentation and template tooling. Fetch pages "
        "from docs.machina.gg, browse the machina-templates repository, and "
        "generate or validate template configurations."
    ),
)


def _notifier(ctx: Optional[Context]) -> Optional[Notifier]:
    """Forward progress messages to the client as MCP log notifications."""
    if ctx is None:
        return None

    async def notify(level: str, message: str) -> None:
        if level == "warning":
            await ctx.warning(message)
        elif level == "error":
            await ctx.error(message)
        else:
            await ctx.info(message)

    return notify


# ============================================================================
# TOOLS
# ============================================================================


@server.tool(
    name="get-machina-docs",
    description=(
        "Fetches documentation from docs.machina.gg. Provide the page or section "
        "slug (default 'introduction'); format 'markdown' keeps headings, links "
        "and code blocks, 'text' returns a single cleaned paragraph."
    ),
)
async def get_machina_docs(
    ctx: Context,
    page: str = "introduction",
    format: Literal["text", "markdown"] = "text",
) -> str:
    return await handle_get_machina_docs({"page": page, "format": format}, _notifier(ctx))


@server.tool(
    name="browse-machina-templates",
    description=(
        "Browses and suggests Machina templates from the GitHub repository. "
        "Filter by category, sport (e.g. 'soccer', 'nba', 'nfl'), use case "
        "(e.g. 'recap', 'quiz', 'poll', 'image') and language ('en', 'es', "
        "'pt-br'); set fetch_content to include the template files."
    ),
)
async def browse_machina_templates(
    ctx: Context,
    category: Literal["all", "reporter", "sport-specific", "brand-specific", "general"] = "all",
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
    content_type: Literal["templates", "connectors", "both"] = "both",
    fetch_content: bool = False,
) -> str:
    return await handle_browse_machina_templates(
        {
            "category": category,
            "sport": sport,
            "use_case": use_case,
            "language": language,
            "content_type": content_type,
            "fetch_content": fetch_content,
        },
        _notifier(ctx),
    )


@server.tool(
    name="generate-machina-template",
    description=(
        "Generate a Machina template configuration. Starts from base_template "
        "in the repository when given, otherwise from a skeleton inferred from "
        "the name; 'type: parameter' placeholders are filled from parameters."
    ),
)
async def generate_machina_template(
    ctx: Context,
    name: str,
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
    base_template: Optional[str] = None,
    parameters: Optional[Dict[str, Any]] = None,
    output_format: Literal["yaml", "json"] = "yaml",
) -> str:
    return await handle_generate_machina_template(
        {
            "name": name,
            "sport": sport,
            "use_case": use_case,
            "language": language,
            "base_template": base_template,
            "parameters": parameters,
            "output_format": output_format,
        },
        _notifier(ctx),
    )


@server.tool(
    name="validate-machina-template",
    description=(
        "Validate a Machina template configuration (YAML text). Reports parse "
        "errors, missing setup fields and the parameter placeholders found."
    ),
)
async def validate_machina_template(content: str) -> Dict[str, Any]:
    return await handle_validate_machina_template({"content": content})


@server.tool(
    name="get-api-status",
    description="Show the configured upstream endpoints and response cache statistics.",
)
async def get_api_status() -> Dict[str, Any]:
    return await handle_get_api_status({})


@server.tool(
    name="clear-cache",
    description=(
        "Clear cached GitHub responses to force fresh data. Optionally pass a "
        "glob pattern such as 'contents/connectors*'."
    ),
)
async def clear_cache(pattern: Optional[str] = None) -> Dict[str, Any]:
    return await handle_clear_cache({"pattern": pattern})


# ============================================================================
# PROMPTS
# ============================================================================


@server.prompt(name="greeting-template", description="A simple greeting prompt template")
def greeting_template(name: str) -> str:
    return f"Please greet {name} in a friendly manner."


@server.prompt(
    name="template-recommendation",
    description="Ask for a Machina template recommendation for a sport and use case",
)
def template_recommendation(sport: str, use_case: str, language: str = "en") -> str:
    return f"""I want to build a {sport} sports agent for {use_case} content in {language}.

Use browse-machina-templates with sport='{sport}', use_case='{use_case}' and language='{language}' to:
1. Pick the closest existing template
2. List the connectors it needs
3. Explain which parameters I must provide

Then use generate-machina-template to draft the configuration."""


@server.prompt(
    name="docs-question",
    description="Answer a question using the Machina documentation",
)
def docs_question(question: str, section: str = "introduction") -> str:
    return f"""Answer this question about Machina: {question}

Start by reading the '{section}' documentation page with get-machina-docs (format='markdown').
If it does not cover the question, check the related sections: {", ".join(DOCS_SECTIONS)}.
Quote the relevant passages and link the page you used."""


# ============================================================================
# RESOURCES
# ============================================================================


@server.resource(API_INFO_URI, name="machina-docs-resource", mime_type="application/json")
def get_api_info() -> str:
    """Information about the available documentation and template browser."""
    settings = get_settings()
    return json.dumps(
        {
            "description": "Machina Documentation API",
            "baseUrl": settings.docs_base_url,
            "availableSections": DOCS_SECTIONS,
            "templateBrowser": {
                "description": "Machina Template Browser Tool",
                "tool": "browse-machina-templates",
                "categories": TEMPLATE_CATEGORIES,
                "commonSports": COMMON_SPORTS,
                "commonUseCases": COMMON_USE_CASES,
                "languages": LANGUAGES,
                "contentTypes": CONTENT_TYPES,
            },
        },
        indent=2,
    )


@server.resource("guide://tool-selection", mime_type="application/json")
def get_tool_selection_guide() -> str:
    """Guide for choosing between the Machina tools."""
    return json.dumps(
        {
            "title": "Machina Tool Selection Guide",
            "workflow_priority": [
                "1. LEARN: get-machina-docs - Read the platform concepts first",
                "2. DISCOVER: browse-machina-templates - Find a template close to the use case",
                "3. DRAFT: generate-machina-template - Build a configuration with parameters filled in",
                "4. CHECK: validate-machina-template - Verify an edited configuration",
            ],
            "tools": {
                "get-machina-docs": "Documentation pages; use format='markdown' to keep structure",
                "browse-machina-templates": "Template and connector discovery with name-based filters",
                "generate-machina-template": "Skeleton or base-template generation with placeholder substitution",
                "validate-machina-template": "Strict YAML check with lenient fallback and structure warnings",
                "get-api-status": "Endpoints and cache statistics",
                "clear-cache": "Drop cached GitHub responses",
            },
            "best_practices": [
                "Browse before generating so base_template names are real",
                "Pass every required parameter reported as missing",
                "Clear the cache after pushing template changes upstream",
            ],
        },
        indent=2,
    )


def _setup_logging(settings: Settings) -> None:
    """Configure loguru sinks; stdout is reserved for the stdio transport."""
    log_format = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}"
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level, format=log_format)
    if settings.log_file is not None:
        logger.add(
            settings.log_file,
            rotation="10 MB",
            retention="7 days",
            level=settings.log_level,
            format=log_format,
        )


def run_http_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Start the FastMCP server using the HTTP transport."""
    settings = get_settings()
    server.run("http", host=host or settings.host, port=port or settings.port)


def main() -> None:
    """Console script entry point."""
    settings = get_settings()
    _setup_logging(settings)
    logger.info(f"Starting {settings.mcp_server_name} v{settings.mcp_server_version}")

    if settings.mcp_transport == "http":
        run_http_server()
    else:
        server.run()


__all__ = [
    "server",
    "run_http_server",
    "main",
    "get_machina_docs",
    "browse_machina_templates",
    "generate_machina_template",
    "validate_machina_template",
    "get_api_status",
    "clear_cache",
    # Prompts
    "greeting_template",
    "template_recommendation",
    "docs_question",
    # Resources
    "get_api_info",
    "get_tool_selection_guide",
]


if __name__ == "__main__":
    main()
