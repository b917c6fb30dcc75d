"""JSON and YAML serialization for document trees and segment tables.

Markup parsers usually hand their trees over as JSON. This module reads that
shape (``type``, ``value``, ``alt``, ``title``, ``url``, ``children``,
``range``, ``raw``) into node objects, writes node trees back out, and dumps
segment tables for diagnostics.

Example:
    from stringsource import StringSource, node_from_json, segments_to_json

    tree = node_from_json(parser_output)
    source = StringSource(tree)
    print(segments_to_json(source.get_segments()))
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from ..source_map import Segment
from .nodes import (
    Node,
    Parent,
    Text,
    InlineCode,
    Literal,
    Image,
    Paragraph,
    Emphasis,
    Link,
    Html,
    Container,
)


# Registry mapping type tags to node classes for deserialization.
# Tags that are missing here become Container or Literal nodes.
_NODE_REGISTRY: dict[str, type[Node]] = {
    "Str": Text,
    "Code": InlineCode,
    "Image": Image,
    "Paragraph": Paragraph,
    "Emphasis": Emphasis,
    "Strong": Emphasis,
    "Delete": Emphasis,
    "Link": Link,
    "Html": Html,
}


def _serialize_range(value: tuple[int, int]) -> list[int]:
    return [value[0], value[1]]


def _serialize_node(node: Node) -> dict[str, Any]:
    """Serialize a single node to a dictionary."""
    result: dict[str, Any] = {
        "type": node.type,
    }
    for name in ("value", "url", "alt", "title"):
        value = getattr(node, name, None)
        if value is not None:
            result[name] = value
    if isinstance(node, Parent):
        result["children"] = [_serialize_node(child) for child in node.children]
    result["range"] = _serialize_range(node.range)
    result["raw"] = node.raw
    return result


def node_to_dict(node: Optional[Node]) -> Optional[dict[str, Any]]:
    """Convert a node tree to a Python dictionary (JSON-serializable).

    Args:
        node: The root node, or None.

    Returns:
        A dictionary in the parser's tree shape, or None.
    """
    if node is None:
        return None
    return _serialize_node(node)


def node_to_json(node: Optional[Node], indent: int | None = 2) -> str:
    """Serialize a node tree to a JSON string.

    Args:
        node: The root node, or None.
        indent: Indentation level for pretty-printing. Use None for compact output.
    """
    return json.dumps(node_to_dict(node), indent=indent, ensure_ascii=False)


def _deserialize_range(data: dict[str, Any]) -> tuple[int, int]:
    value = data.get("range")
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Node {data.get('type')!r} needs a [start, end] 'range', got {value!r}")
    start, end = value
    if isinstance(start, bool) or isinstance(end, bool) or not isinstance(start, int) or not isinstance(end, int):
        raise TypeError(f"Node range offsets must be ints, got {value!r}")
    return (start, end)


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Node field {key!r} must be a string, got {type(value)}")
    return value


def _deserialize_node(data: dict[str, Any]) -> Node:
    """Deserialize a single node from a dictionary."""
    if not isinstance(data, dict):
        raise TypeError(f"Unsupported type for deserialization: {type(data)}")
    if "type" not in data:
        raise ValueError("Missing 'type' field in node data")
    if not isinstance(data.get("raw"), str):
        raise ValueError(f"Node {data['type']!r} needs a string 'raw' field")

    type_name = data["type"]
    kwargs: dict[str, Any] = {
        "range": _deserialize_range(data),
        "raw": data["raw"],
    }
    children = data.get("children")

    node_class = _NODE_REGISTRY.get(type_name)
    if node_class is None:
        if children is not None:
            node_class = Container
        elif data.get("value") is not None:
            node_class = Literal
        else:
            node_class = Container
        kwargs["kind"] = type_name
    elif node_class is Emphasis:
        kwargs["kind"] = type_name

    if issubclass(node_class, Parent):
        kwargs["children"] = tuple(_deserialize_node(child) for child in children or ())
    if node_class in (Text, InlineCode, Literal):
        value = _optional_str(data, "value")
        if value is None:
            raise ValueError(f"Node {type_name!r} needs a 'value' field")
        kwargs["value"] = value
    elif node_class is Html:
        kwargs["value"] = _optional_str(data, "value")
    elif node_class is Image:
        kwargs["url"] = _optional_str(data, "url") or ""
        kwargs["alt"] = _optional_str(data, "alt")
        kwargs["title"] = _optional_str(data, "title")
    elif node_class is Link:
        kwargs["url"] = _optional_str(data, "url") or ""
        kwargs["title"] = _optional_str(data, "title")

    return node_class(**kwargs)


def node_from_dict(data: Optional[dict[str, Any]]) -> Optional[Node]:
    """Reconstruct a node tree from a Python dictionary.

    Args:
        data: A dictionary in the parser's tree shape, or None. Extra keys
            such as ``loc`` are ignored.

    Returns:
        The root node, or None.

    Raises:
        ValueError: If a node lacks ``type``, ``range`` or ``raw``, or a
            value-bearing node lacks ``value``.
        TypeError: If a field has the wrong type.
    """
    if data is None:
        return None
    return _deserialize_node(data)


def node_from_json(json_str: str) -> Optional[Node]:
    """Deserialize a node tree from a JSON string.

    Raises:
        ValueError: If the JSON describes a malformed node.
        json.JSONDecodeError: If the string is not valid JSON.
    """
    data = json.loads(json_str)
    return node_from_dict(data)


def node_to_yaml(node: Optional[Node]) -> str:
    """Serialize a node tree to a YAML string.

    Raises:
        ImportError: If PyYAML is not installed.
    """
    yaml = _import_yaml()
    return yaml.dump(node_to_dict(node), default_flow_style=False, sort_keys=False, allow_unicode=True)


def node_from_yaml(yaml_str: str) -> Optional[Node]:
    """Deserialize a node tree from a YAML string.

    Raises:
        ImportError: If PyYAML is not installed.
        ValueError: If the YAML describes a malformed node.
    """
    yaml = _import_yaml()
    data = yaml.safe_load(yaml_str)
    return node_from_dict(data)


# --- Segment tables ---

def _serialize_segment(segment: Segment) -> dict[str, Any]:
    return {
        "original": _serialize_range(segment.original),
        "intermediate": _serialize_range(segment.intermediate),
        "generated": _serialize_range(segment.generated),
        "text": segment.text,
    }


def segments_to_dict(segments: Iterable[Segment]) -> list[dict[str, Any]]:
    """Convert segments to a list of dictionaries (JSON-serializable)."""
    return [_serialize_segment(segment) for segment in segments]


def segments_to_json(segments: Iterable[Segment], indent: int | None = 2) -> str:
    """Serialize segments to a JSON string."""
    return json.dumps(segments_to_dict(segments), indent=indent, ensure_ascii=False)


def segments_to_yaml(segments: Iterable[Segment]) -> str:
    """Serialize segments to a YAML string.

    Raises:
        ImportError: If PyYAML is not installed.
    """
    yaml = _import_yaml()
    return yaml.dump(segments_to_dict(segments), default_flow_style=None, sort_keys=False, allow_unicode=True)


def _import_yaml():
    try:
        import yaml
    except ImportError:
        raise ImportError(
            "PyYAML is required for YAML serialization. "
            "Install it with: pip install stringsource[yaml]"
        )
    return yaml
