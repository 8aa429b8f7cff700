"""
Machina constants: documentation sections and template browser vocabulary.
"""

from typing import List

DOCS_SECTIONS: List[str] = [
    "introduction",
    "get-access-to-studio",
    "integrate-sports-data",
    "deploy-sports-agent",
    "machina-studio",
    "agents",
    "connectors",
    "mappings",
    "workflows",
    "prompts",
]

# Template browser
TEMPLATE_CATEGORIES: List[str] = ["all", "reporter", "sport-specific", "brand-specific", "general"]
COMMON_SPORTS: List[str] = ["soccer", "nba", "nfl", "rugby"]
COMMON_USE_CASES: List[str] = [
    "recap",
    "quiz",
    "poll",
    "image",
    "summary",
    "briefing",
    "websearch",
]
LANGUAGES: List[str] = ["en", "es", "pt-br"]
CONTENT_TYPES: List[str] = ["templates", "connectors", "both"]

# Name fragments the category filter keys on
SPORT_MARKERS: List[str] = ["sport", "nba", "soccer", "nfl", "rugby"]
BRAND_MARKERS: List[str] = ["dazn", "estelarbet", "sportingbet"]
GENERAL_EXCLUDED_MARKERS: List[str] = ["reporter-", "sport", "nba", "dazn"]

# Repository layout
TEMPLATES_DIR = "agent-templates"
CONNECTORS_DIR = "connectors"
YAML_EXTENSIONS = (".yaml", ".yml")
CONNECTOR_MANIFEST = "connector.yaml"

USAGE_INSTRUCTIONS: List[str] = [
    "\nTo use these templates:",
    "1. Install required connectors from the 'connectors' directory",
    "2. Configure necessary environment variables in your Machina environment",
    "3. Import the template workflows into your Machina instance",
]
