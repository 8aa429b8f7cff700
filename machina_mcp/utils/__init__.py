"""Utility helpers: constants, name heuristics, HTML conversion."""

from .html import extract_main_content, html_to_markdown, html_to_text
from .naming import (
    filter_templates,
    infer_connector_description,
    infer_template_category,
    infer_template_description,
    infer_template_language,
    infer_template_sport,
)

__all__ = [
    "extract_main_content",
    "html_to_markdown",
    "html_to_text",
    "filter_templates",
    "infer_connector_description",
    "infer_template_category",
    "infer_template_description",
    "infer_template_language",
    "infer_template_sport",
]
