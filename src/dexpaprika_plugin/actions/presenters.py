"""
Plain-text rendering of response envelopes for chat-style hosts.
"""

from typing import Any, Dict, List

__all__ = ["render_text"]

# Envelope keys rendered in the header rather than as body lines
_HEADER_KEYS = ("title", "timestamp")


def _label(key: str) -> str:
    return key.replace("_", " ").capitalize()


def _render_item(item: Dict[str, Any], index: int) -> List[str]:
    position = item.get("position", index)
    heading = item.get("name") or item.get("id") or f"Item {position}"
    lines = [f"{position}. {heading}"]
    for key, value in item.items():
        if key in ("position", "name"):
            continue
        lines.append(f"   {_label(key)}: {value}")
    return lines


def _render_value(key: str, value: Any, indent: str = "") -> List[str]:
    if isinstance(value, dict):
        lines = [f"{indent}{_label(key)}:"]
        for sub_key, sub_value in value.items():
            lines.extend(_render_value(sub_key, sub_value, indent + "  "))
        return lines

    if isinstance(value, list):
        if not value:
            return [f"{indent}{_label(key)}: none"]
        lines = [f"{indent}{_label(key)}:"]
        for index, item in enumerate(value, start=1):
            if isinstance(item, dict):
                lines.extend(f"{indent}{line}" for line in _render_item(item, index))
            else:
                lines.append(f"{indent}- {item}")
        return lines

    if value is None:
        value = "N/A"
    return [f"{indent}{_label(key)}: {value}"]


def render_text(envelope: Dict[str, Any]) -> str:
    """Render the ``formatted_response`` of an envelope as readable lines.

    >>> render_text({"formatted_response": {"title": "Stats", "timestamp": "t", "total_pools": 3}})
    'Stats\\nAs of t\\n\\nTotal pools: 3'
    """
    formatted = envelope.get("formatted_response") or {}
    lines = [str(formatted.get("title", "DexPaprika"))]
    if formatted.get("timestamp"):
        lines.append(f"As of {formatted['timestamp']}")

    body: List[str] = []
    for key, value in formatted.items():
        if key in _HEADER_KEYS:
            continue
        body.extend(_render_value(key, value))

    if body:
        lines.append("")
        lines.extend(body)
    return "\n".join(lines)
