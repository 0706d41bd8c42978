import json
from typing import Any, Dict, Optional

from regtree.models.nodes import Node

DEFAULT_INDENT = 4


def render(node: Optional[Node]) -> Optional[Dict[str, Any]]:
    """Plain dict form of ``node``; None stays None."""
    if node is None:
        return None
    return node.render()


def emit_json(node: Optional[Node], indent: int = DEFAULT_INDENT) -> str:
    """
    Serialize a node and its subtree.

    A missing node is written as ``null``. Keys keep the order ``render()``
    produces them in, so the same tree always gives the same text.
    """
    return json.dumps(render(node), indent=indent, ensure_ascii=False)
