"""Template browsing and generation against the machina-templates repository."""

import json
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from machina_mcp.api import fetch_file_content, fetch_repo_content
from machina_mcp.api.http_utils import FetchError
from machina_mcp.config import get_settings
from machina_mcp.parsers import serialize
from machina_mcp.services.notifications import Notifier, emit
from machina_mcp.services.template_builder import (
    build_template_skeleton,
    fill_parameters,
    find_parameters,
    load_config,
)
from machina_mcp.utils.constants import (
    CONNECTOR_MANIFEST,
    CONNECTORS_DIR,
    TEMPLATES_DIR,
    USAGE_INSTRUCTIONS,
    YAML_EXTENSIONS,
)
from machina_mcp.utils.naming import (
    filter_templates,
    infer_connector_description,
    infer_template_description,
)

CONTENT_PREVIEW_CHARS = 1500


def _yaml_files(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [entry for entry in entries if entry.get("name", "").endswith(YAML_EXTENSIONS)]


def _connector_files(connector_name: str, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        entry
        for entry in entries
        if entry.get("name", "").startswith(connector_name) or entry.get("name") == CONNECTOR_MANIFEST
    ]


async def _collect_templates(
    category: str,
    sport: Optional[str],
    use_case: Optional[str],
    language: Optional[str],
    fetch_content: bool,
    notify: Optional[Notifier],
) -> List[Dict[str, Any]]:
    templates: List[Dict[str, Any]] = []
    try:
        listing = await fetch_repo_content(TEMPLATES_DIR)
        templates = [
            dict(entry)
            for entry in filter_templates(listing, category, sport, use_case, language)
        ]
        if fetch_content:
            for template in templates[: get_settings().fetch_content_limit]:
                await emit(notify, "info", f"Fetching content for template: {template['name']}...")
                files = await fetch_repo_content(f"{TEMPLATES_DIR}/{template['name']}")
                yaml_files = _yaml_files(files)
                if yaml_files:
                    template["content"] = await fetch_file_content(yaml_files[0]["download_url"])
    except Exception as e:
        logger.error(f"Error fetching templates: {e}")
        await emit(notify, "warning", f"Error fetching templates: {e}")
    return templates


async def _collect_connectors(
    sport: Optional[str], fetch_content: bool, notify: Optional[Notifier]
) -> List[Dict[str, Any]]:
    connectors: List[Dict[str, Any]] = []
    try:
        connectors = [dict(entry) for entry in await fetch_repo_content(CONNECTORS_DIR)]
        if sport:
            connectors = [c for c in connectors if sport.lower() in c.get("name", "").lower()]
        if fetch_content:
            for connector in connectors[: get_settings().fetch_content_limit]:
                await emit(notify, "info", f"Fetching content for connector: {connector['name']}...")
                files = await fetch_repo_content(f"{CONNECTORS_DIR}/{connector['name']}")
                main_files = _connector_files(connector["name"], files)
                if main_files:
                    connector["content"] = await fetch_file_content(main_files[0]["download_url"])
    except Exception as e:
        logger.error(f"Error fetching connectors: {e}")
        await emit(notify, "warning", f"Error fetching connectors: {e}")
    return connectors


def _preview(content: str) -> List[str]:
    body = content if len(content) <= CONTENT_PREVIEW_CHARS else content[:CONTENT_PREVIEW_CHARS] + "\n..."
    return ["```yaml", body.rstrip("\n"), "```"]


def format_suggestions(
    templates: List[Dict[str, Any]],
    connectors: List[Dict[str, Any]],
    category: str = "all",
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
    content_type: str = "both",
) -> str:
    """Render browse results as the suggestion text returned to the client."""
    suggestions: List[str] = []

    if templates:
        category_name = "various categories" if category == "all" else f"{category} category"
        sport_text = f" for {sport}" if sport else ""
        use_case_text = f" related to {use_case}" if use_case else ""
        language_text = f" in {language}" if language else ""
        suggestions.append(
            "Based on your criteria, here are recommended templates from "
            f"{category_name}{sport_text}{use_case_text}{language_text}:"
        )
        for template in templates:
            suggestions.append(f"- {template['name']}: {infer_template_description(template['name'])}")
            if template.get("content"):
                suggestions.extend(_preview(template["content"]))
    else:
        suggestions.append("No templates found matching your criteria.")

    if connectors and content_type in ("connectors", "both"):
        suggestions.append("\nRelated connectors that may be useful:")
        for connector in connectors:
            suggestions.append(f"- {connector['name']}: {infer_connector_description(connector['name'])}")
            if connector.get("content"):
                suggestions.extend(_preview(connector["content"]))

    suggestions.extend(USAGE_INSTRUCTIONS)
    return "\n".join(suggestions)


async def browse_templates(
    category: str = "all",
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
    content_type: str = "both",
    fetch_content: bool = False,
    notify: Optional[Notifier] = None,
) -> str:
    """Browse the templates repository and suggest matching templates and connectors.

    A failing templates or connectors listing is reported as a warning
    notification and treated as empty.

    Args:
        category: "all", "reporter", "sport-specific", "brand-specific" or "general"
        sport: Sport filter (e.g., "soccer", "nba")
        use_case: Use-case filter (e.g., "recap", "quiz")
        language: Language filter ("en", "es", "pt-br")
        content_type: "templates", "connectors" or "both"
        fetch_content: Also download the main YAML file of the first few matches
        notify: Optional progress notifier

    Returns:
        Suggestion text
    """
    await emit(notify, "info", "Fetching Machina templates from GitHub repository...")
    await emit(notify, "info", "Collecting repository structure...")

    templates: List[Dict[str, Any]] = []
    connectors: List[Dict[str, Any]] = []
    if content_type in ("templates", "both"):
        templates = await _collect_templates(category, sport, use_case, language, fetch_content, notify)
    if content_type in ("connectors", "both"):
        connectors = await _collect_connectors(sport, fetch_content, notify)

    return format_suggestions(templates, connectors, category, sport, use_case, language, content_type)


async def load_template_config(template_name: str) -> Tuple[Dict[str, Any], str]:
    """Fetch a template's first YAML file and parse it.

    PyYAML is used first; the lenient parser only takes over when the file
    is not valid YAML.

    Returns:
        (parsed configuration, source file name)

    Raises:
        FetchError: If the template has no YAML file or cannot be fetched
        ValueError: If the file does not hold a mapping
    """
    files = await fetch_repo_content(f"{TEMPLATES_DIR}/{template_name}")
    yaml_files = _yaml_files(files)
    if not yaml_files:
        raise FetchError(f"No YAML files found in template {template_name}")
    source = yaml_files[0]["name"]
    content = await fetch_file_content(yaml_files[0]["download_url"])

    config, strict_error = load_config(content)
    if strict_error is not None:
        logger.warning(f"{template_name}/{source} is not valid YAML, using lenient parser: {strict_error}")
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError(f"Template {template_name}/{source} does not contain a mapping")
    return config, source


async def generate_template(
    name: str,
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
    base_template: Optional[str] = None,
    parameters: Optional[Dict[str, Any]] = None,
    output_format: str = "yaml",
    notify: Optional[Notifier] = None,
) -> str:
    """Generate a template configuration with placeholders filled in.

    Starts from ``base_template`` fetched from the repository when given,
    otherwise from a skeleton built for ``name``.

    Returns:
        Summary text followed by the configuration in a fenced block
    """
    if base_template:
        await emit(notify, "info", f"Loading base template: {base_template}...")
        config, source = await load_template_config(base_template)
        origin = f"from {base_template}/{source}"
    else:
        config = build_template_skeleton(name, sport=sport, use_case=use_case, language=language)
        origin = "from skeleton"

    placeholders = find_parameters(config)
    filled, missing = fill_parameters(config, parameters)

    if output_format == "json":
        body = json.dumps(filled, indent=2, default=str)
    else:
        body = serialize(filled)

    lines = [
        f"Generated template '{name}' ({origin})",
        f"Parameters: {len(placeholders)} placeholder(s), {len(placeholders) - len(missing)} resolved",
    ]
    if missing:
        lines.append("Missing required parameters: " + ", ".join(missing))
    lines.extend(["", f"```{output_format}", body, "```"])
    return "\n".join(lines)
