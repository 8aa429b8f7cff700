"""Template configuration building, placeholder substitution and validation."""

import copy
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import yaml

from machina_mcp.parsers import parse
from machina_mcp.utils.naming import (
    infer_template_category,
    infer_template_description,
    infer_template_language,
    infer_template_sport,
)

PARAMETER_TYPE = "parameter"
KNOWN_SECTIONS = ("setup", "workflow", "workflows", "agent", "agents", "connector", "prompts", "mappings")
SETUP_FIELDS = ("title", "description", "version")


def is_parameter(node: Any) -> bool:
    return isinstance(node, dict) and node.get("type") == PARAMETER_TYPE


def _walk(value: Any, path: Tuple[str, ...], ancestors: FrozenSet[int] = frozenset()):
    # YAML aliases can make a container its own descendant
    if id(value) in ancestors:
        return
    if isinstance(value, dict):
        ancestors = ancestors | {id(value)}
        for key, item in value.items():
            yield path + (str(key),), item
            yield from _walk(item, path + (str(key),), ancestors)
    elif isinstance(value, list):
        ancestors = ancestors | {id(value)}
        for index, item in enumerate(value):
            yield path + (str(index),), item
            yield from _walk(item, path + (str(index),), ancestors)


def _parameter_name(path: Tuple[str, ...], node: Dict[str, Any]) -> str:
    return str(node.get("name") or path[-1])


def find_parameters(config: Any) -> List[Dict[str, Any]]:
    """List every ``type: parameter`` placeholder in a configuration tree.

    Args:
        config: Parsed template configuration

    Returns:
        List of dicts with name, path (dotted), description, required, default
    """
    found = []
    for path, node in _walk(config, ()):
        if not is_parameter(node):
            continue
        found.append(
            {
                "name": _parameter_name(path, node),
                "path": ".".join(path),
                "description": node.get("description"),
                "required": bool(node.get("required", False)),
                "default": node.get("default"),
            }
        )
    return found


def _substitute(
    value: Any,
    path: Tuple[str, ...],
    arguments: Dict[str, Any],
    missing: List[str],
    ancestors: FrozenSet[int] = frozenset(),
) -> Any:
    if id(value) in ancestors:
        return value
    if is_parameter(value) and path:
        name = _parameter_name(path, value)
        if name in arguments:
            return arguments[name]
        if "default" in value:
            return value["default"]
        if value.get("required"):
            missing.append(name)
        return None
    if isinstance(value, dict):
        ancestors = ancestors | {id(value)}
        for key in list(value):
            value[key] = _substitute(value[key], path + (str(key),), arguments, missing, ancestors)
    elif isinstance(value, list):
        ancestors = ancestors | {id(value)}
        for index, item in enumerate(value):
            value[index] = _substitute(item, path + (str(index),), arguments, missing, ancestors)
    return value


def fill_parameters(config: Any, arguments: Optional[Dict[str, Any]] = None) -> Tuple[Any, List[str]]:
    """Replace placeholders with caller-supplied values.

    Each placeholder takes ``arguments[name]``, else its ``default``, else None.
    The input tree is left untouched.

    Returns:
        (filled copy, names of required parameters left unresolved)
    """
    missing: List[str] = []
    filled = _substitute(copy.deepcopy(config), (), arguments or {}, missing)
    return filled, missing


def _title(slug: str) -> str:
    return " ".join(part.capitalize() for part in slug.replace("_", "-").split("-") if part)


def build_template_skeleton(
    name: str,
    sport: Optional[str] = None,
    use_case: Optional[str] = None,
    language: Optional[str] = None,
) -> Dict[str, Any]:
    """Build an in-memory template configuration for a new agent template.

    Missing sport and language are inferred from the name.
    """
    slug = "-".join(name.lower().split())
    sport = sport or infer_template_sport(slug)
    language = language or infer_template_language(slug) or "en"
    task_name = f"{use_case or 'content'}-generation"
    description = infer_template_description(slug)

    integrations = ["openai"]
    if sport:
        integrations.insert(0, f"sportradar-{sport}")

    return {
        "setup": {
            "title": _title(slug),
            "description": description,
            "category": infer_template_category(slug),
            "sport": sport,
            "use_case": use_case,
            "language": language,
            "integrations": integrations,
            "version": "1.0.0",
        },
        "workflow": {
            "name": slug,
            "title": _title(slug),
            "description": description,
            "inputs": {
                "event_code": {
                    "type": PARAMETER_TYPE,
                    "description": "Sport event identifier used to load event data",
                    "required": True,
                },
                "language": {
                    "type": PARAMETER_TYPE,
                    "description": "Language of the generated content",
                    "default": language,
                },
            },
            "tasks": [
                {
                    "type": "document",
                    "name": "load-event",
                    "description": "Load the event document for $.get('event_code')",
                },
                {
                    "type": "prompt",
                    "name": task_name,
                    "description": f"Generate {use_case or 'sports'} content",
                },
                {
                    "type": "document",
                    "name": "save-content",
                    "description": f"Store the {task_name} output",
                },
            ],
        },
    }


def load_config(content: str) -> Tuple[Any, Optional[str]]:
    """Parse configuration text with PyYAML, falling back to the lenient parser.

    Returns:
        (parsed value, strict parse error or None if PyYAML accepted the text)
    """
    try:
        return yaml.safe_load(content), None
    except yaml.YAMLError as exc:
        return parse(content), str(exc)


def validate_template(content: str) -> Dict[str, Any]:
    """Check a template configuration document.

    Strict YAML parsing is tried first; when it fails the lenient parser is
    used so structural checks can still report something useful.

    Returns:
        Dict with valid, parser, errors, warnings, sections, parameters
    """
    report: Dict[str, Any] = {
        "valid": True,
        "parser": "strict",
        "errors": [],
        "warnings": [],
        "sections": [],
        "parameters": [],
    }

    data, strict_error = load_config(content)
    if strict_error is not None:
        report["errors"].append(f"Strict YAML parsing failed: {strict_error}")
        report["parser"] = "lenient"

    if data is None:
        data = {}
    if not isinstance(data, dict):
        report["errors"].append(f"Top-level value must be a mapping, got {type(data).__name__}")
        report["valid"] = False
        return report
    if not data:
        report["errors"].append("Template is empty")
        report["valid"] = False
        return report

    report["sections"] = [str(key) for key in data]
    if not any(section in data for section in KNOWN_SECTIONS):
        report["warnings"].append(
            "No recognised template sections (expected one of: " + ", ".join(KNOWN_SECTIONS) + ")"
        )

    setup = data.get("setup")
    if isinstance(setup, dict):
        for field in SETUP_FIELDS:
            if not setup.get(field):
                report["warnings"].append(f"setup.{field} is missing")
    else:
        report["warnings"].append("Missing 'setup' section")

    report["parameters"] = find_parameters(data)
    for parameter in report["parameters"]:
        if not parameter["description"]:
            report["warnings"].append(f"Parameter '{parameter['name']}' has no description")

    report["valid"] = not report["errors"]
    return report
