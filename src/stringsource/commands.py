"""Value commands that rewrite a node's value before it is flattened.

A replacer callback passed to :class:`stringsource.StringSource` picks a
command per node. Commands work on a single node and never walk a tree.

Example:
    from stringsource import StringSource, Mask
    from stringsource.ast.nodes import InlineCode

    def hide_code(node, parent):
        if isinstance(node, InlineCode):
            return Mask("*")
        return None

    source = StringSource(tree, replacer=hide_code)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .ast.nodes import Node
from .errors import CommandError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mask(object):
    """Replace a node's value with a symbol repeated to the value's length.

    Masking keeps every offset intact, so findings in the plain text still
    map to the right places in the source.

    Attributes:
        symbol: A single character.
    """
    symbol: str

    def __post_init__(self):
        if not isinstance(self.symbol, str) or len(self.symbol) != 1:
            raise CommandError(f"Mask symbol should be a single character, got {self.symbol!r}")

    def apply(self, node: Node) -> Node:
        value = getattr(node, "value", None)
        if value is None:
            raise CommandError(f"Can not mask {node.type} node: it has no value")
        return dataclasses.replace(node, value=self.symbol * len(value))


@dataclass(frozen=True)
class Empty(object):
    """Clear a node's value so it contributes no text."""

    def apply(self, node: Node) -> Node:
        if getattr(node, "value", None) is None:
            return node
        return dataclasses.replace(node, value="")


ValueCommand = Union[Mask, Empty]


def apply_command(command: Optional[ValueCommand], node: Node) -> Node:
    """Apply a value command to a node and return the rewritten node.

    Args:
        command: The command to apply, or None to leave the node as it is.
        node: The node to rewrite. It is never modified in place.

    Returns:
        A new node with the rewritten value, or ``node`` itself.

    Raises:
        CommandError: If a Mask is applied to a node without a value.
    """
    if command is None:
        return node
    rewritten = command.apply(node)
    logger.debug("Applied %r to %s node at %s", command, node.type, node.range)
    return rewritten
