"""Template services: browsing, generation and validation."""

from .notifications import Notifier, emit
from .template_builder import (
    build_template_skeleton,
    fill_parameters,
    find_parameters,
    load_config,
    validate_template,
)
from .template_service import (
    browse_templates,
    format_suggestions,
    generate_template,
    load_template_config,
)

__all__ = [
    "Notifier",
    "emit",
    "browse_templates",
    "format_suggestions",
    "generate_template",
    "load_template_config",
    "build_template_skeleton",
    "fill_parameters",
    "find_parameters",
    "load_config",
    "validate_template",
]
