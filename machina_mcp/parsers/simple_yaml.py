"""Lenient YAML-subset parser and serializer for Machina template configuration.

Covers the small dialect used by template configuration files: two-space
indentation, ``#`` comment lines, ``key: value`` lines and ``- item`` lines.
Values are plain Python objects: ``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict``.

The parser is best effort and never raises. List items always collect under a
synthetic ``items`` key of the enclosing mapping, so a mapping whose value is a
sequence does not survive ``serialize`` followed by ``parse`` unchanged.

Two more shapes do not round-trip. Quoting does not escape line breaks, so
text containing a newline is written across several lines and reads back
truncated at the first one. Mapping keys are written verbatim, so a key
containing ``:`` or starting with ``- `` reads back as a different key or as
a list item.
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

INDENT_STEP = 2
ITEMS_KEY = "items"

# Exponent form is what repr() writes for very small or large floats
_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


class InvalidValueKind(TypeError):
    """Raised when a value outside the supported subset is serialized."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Cannot serialize value of type {type(value).__name__}: {value!r}")


def coerce_scalar(text: str) -> Any:
    """Convert the value part of a line into a Python value.

    Rules are tried in order, first match wins: quoted text, ``true``/``false``,
    ``null``, numbers, ``[...]`` JSON sequences, plain text.

    Args:
        text: Trimmed value text

    Returns:
        str, bool, None, int, float or list
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    if _NUMBER_RE.fullmatch(text):
        if "." in text or "e" in text or "E" in text:
            return float(text)
        return int(text)
    if text.startswith("[") and text.endswith("]"):
        try:
            parsed = json.loads(text)
        except ValueError:
            return text
        if isinstance(parsed, list):
            return parsed
    return text


def _is_list_item(content: str) -> bool:
    return content == "-" or (content.startswith("-") and content[1].isspace())


def parse(text: str) -> Dict[str, Any]:
    """Parse indentation-structured text into a nested dict.

    Malformed lines are skipped, never reported.

    Args:
        text: Configuration text

    Returns:
        Root mapping, possibly empty
    """
    root: Dict[str, Any] = {}
    # (indentation, container) pairs; the bottom entry is never popped
    stack: List[Tuple[int, Dict[str, Any]]] = [(0, root)]
    current_indent = 0
    pending: Optional[Dict[str, Any]] = None

    for raw_line in text.splitlines():
        content = raw_line.strip()
        if not content or content.startswith("#"):
            continue

        indent = len(raw_line) - len(raw_line.lstrip())
        if indent > current_indent:
            if pending is not None:
                stack.append((indent, pending))
            current_indent = indent
        elif indent < current_indent:
            while len(stack) > 1 and stack[-1][0] > indent:
                stack.pop()
            current_indent = indent
        pending = None

        target = stack[-1][1]

        if _is_list_item(content):
            items = target.get(ITEMS_KEY)
            if not isinstance(items, list):
                items = target[ITEMS_KEY] = []
            items.append(coerce_scalar(content[1:].strip()))
        elif ":" in content:
            key, _, value = content.partition(":")
            key = key.strip()
            value = value.strip()
            if value:
                target[key] = coerce_scalar(value)
            else:
                child: Dict[str, Any] = {}
                target[key] = child
                pending = child

    return root


def needs_quotes(text: str) -> bool:
    """Return True when a string must be double-quoted to survive parsing."""
    return (
        not text
        or "\n" in text
        or ":" in text
        or "#" in text
        or text != text.strip()
    )


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        if needs_quotes(value):
            return '"' + value.replace('"', '\\"') + '"'
        return value
    raise InvalidValueKind(value)


def _is_block(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple)) and len(value) > 0


def _format_inline(value: Any) -> str:
    if isinstance(value, dict):
        return "{}"
    if isinstance(value, (list, tuple)):
        return "[]"
    return _format_scalar(value)


def _render(value: Any, indent: int) -> List[str]:
    pad = " " * indent
    lines: List[str] = []

    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidValueKind(key)
            if _is_block(item):
                lines.append(f"{pad}{key}:")
                lines.extend(_render(item, indent + INDENT_STEP))
            else:
                lines.append(f"{pad}{key}: {_format_inline(item)}")
    elif isinstance(value, (list, tuple)):
        for item in value:
            if _is_block(item):
                nested = _render(item, indent + INDENT_STEP)
                lines.append(f"{pad}- {nested[0].lstrip()}")
                lines.extend(nested[1:])
            else:
                lines.append(f"{pad}- {_format_inline(item)}")
    else:
        lines.append(pad + _format_scalar(value))

    return lines


def serialize(value: Any, indent: int = 0) -> str:
    """Render a nested value as indentation-structured text.

    Key order follows dict insertion order, so output is deterministic.

    Args:
        value: None, bool, int, float, str, list/tuple or dict with str keys
        indent: Column of the outermost lines

    Returns:
        Text without a trailing newline

    Raises:
        InvalidValueKind: If the tree holds an unsupported type
    """
    if not _is_block(value):
        return _format_inline(value)
    return "\n".join(_render(value, indent))
