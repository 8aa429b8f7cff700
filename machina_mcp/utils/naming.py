"""Name-based heuristics for Machina templates and connectors.

Template and connector directories carry no metadata in the repository
listing, so descriptions, sport, category and language are guessed from the
directory name. Lookups are ordered; the first matching fragment wins.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from machina_mcp.utils.constants import (
    BRAND_MARKERS,
    COMMON_SPORTS,
    GENERAL_EXCLUDED_MARKERS,
    SPORT_MARKERS,
)

TEMPLATE_DESCRIPTIONS: List[Tuple[str, str]] = [
    # Reporter templates
    ("reporter-summary", "Generates game summaries"),
    ("reporter-briefing", "Creates pre-game briefings"),
    ("reporter-polls", "Generates interactive polls"),
    ("reporter-quizzes", "Creates sports quizzes"),
    ("reporter-image", "Generates sports-related images"),
    ("reporter-websearch", "Researches web content for sports events"),
    ("reporter-recap", "Creates post-game recaps"),
    # Sport-specific templates
    ("nba", "NBA-specific content workflows"),
    ("soccer", "Soccer data processing workflows"),
    ("superbowl", "NFL Super Bowl specific templates"),
    ("fantasy", "Fantasy sports content"),
    # Brand-specific templates
    ("estelarbet", "Templates for Estelarbet brand"),
    ("dazn", "Templates for DAZN"),
    ("sportingbet-blog", "Blog content for Sportingbet"),
    # General templates
    ("chat-completion", "Generic chat completion workflows"),
    ("gameday", "Game day content generation"),
    ("quizzes", "Generic sports quiz templates"),
]
DEFAULT_TEMPLATE_DESCRIPTION = "Sports content workflow template"

CONNECTOR_DESCRIPTIONS: List[Tuple[str, str]] = [
    # AI services
    ("openai", "OpenAI API integration for AI capabilities"),
    ("groq", "Groq API integration for fast inference"),
    ("perplexity", "Perplexity API for web search capabilities"),
    ("vertex", "Google Vertex AI integration"),
    ("stability", "Stability AI for image generation"),
    # Sports data
    ("sportradar-soccer", "Soccer data API integration"),
    ("sportradar-nba", "NBA data API integration"),
    ("sportradar-nfl", "NFL data API integration"),
    ("sportradar-rugby", "Rugby data API integration"),
    ("sportingbet", "Sports betting data integration"),
    # Utilities
    ("storage", "Data storage connector"),
    ("machina-db", "Database connector for Machina"),
    ("search", "Search functionality connector"),
    ("docling", "Document processing connector"),
]
DEFAULT_CONNECTOR_DESCRIPTION = "Integration connector for Machina workflows"

_LANGUAGE_RE = re.compile(r"-(pt-br|es|en)(?=-|$)")


def _lookup(name: str, table: Iterable[Tuple[str, str]], default: str) -> str:
    lowered = name.lower()
    for fragment, description in table:
        if fragment in lowered:
            return description
    return default


def infer_template_description(template_name: str) -> str:
    return _lookup(template_name, TEMPLATE_DESCRIPTIONS, DEFAULT_TEMPLATE_DESCRIPTION)


def infer_connector_description(connector_name: str) -> str:
    return _lookup(connector_name, CONNECTOR_DESCRIPTIONS, DEFAULT_CONNECTOR_DESCRIPTION)


def infer_template_sport(template_name: str) -> Optional[str]:
    """Guess the sport a template targets, or None for sport-agnostic names."""
    name = template_name.lower()
    if "superbowl" in name:
        return "nfl"
    for sport in COMMON_SPORTS:
        if sport in name:
            return sport
    return None


def infer_template_category(template_name: str) -> str:
    """Guess the browser category (reporter, sport-specific, brand-specific, general).

    The guessed category always passes ``matches_category`` for that category.
    The browse filter categories overlap, so a name can also match others:
    ``general`` only excludes the markers in ``GENERAL_EXCLUDED_MARKERS``, and
    ``soccer-stats`` is guessed as sport-specific yet still listed as general.
    """
    name = template_name.lower()
    if "reporter-" in name:
        return "reporter"
    if any(marker in name for marker in SPORT_MARKERS):
        return "sport-specific"
    if any(marker in name for marker in BRAND_MARKERS):
        return "brand-specific"
    return "general"


def infer_template_language(template_name: str) -> Optional[str]:
    match = _LANGUAGE_RE.search(template_name.lower())
    return match.group(1) if match else None


def matches_category(name: str, category: Optional[str]) -> bool:
    """Browse filter for one category; categories may overlap."""
    name = name.lower()
    if not category or category == "all":
        return True
    if category == "reporter":
        return "reporter-" in name
    if category == "sport-specific":
        return any(marker in name for marker in SPORT_MARKERS)
    if category == "brand-specific":
        return any(marker in name for marker in BRAND_MARKERS)
    if category == "general":
        return not any(marker in name for marker in GENERAL_EXCLUDED_MARKERS)
    return True


def filter_templates(
    templates: Iterable[Dict[str, Any]],
    category: Optional[str] = None,
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Filter repository entries by name.

    Args:
        templates: Directory entries, each with a "name" key
        category: Browser category; "all" or None disables the check
        sport: Substring that must appear in the name
        use_case: Substring that must appear in the name
        language: Language code; the name must contain "-<language>"

    Returns:
        Matching entries, in input order
    """
    selected = []
    for template in templates:
        name = template.get("name", "").lower()
        if not matches_category(name, category):
            continue
        if sport and sport.lower() not in name:
            continue
        if use_case and use_case.lower() not in name:
            continue
        if language and f"-{language.lower()}" not in name:
            continue
        selected.append(template)
    return selected
