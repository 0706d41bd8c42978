"""
Citation lookup in an emitted regulation tree.

Works on the plain JSON form (as loaded with ``json.load``) so converted
files can be searched without decoding the XML again.
"""

import re
from typing import Any, Dict, List, Optional

_CITATION_RE = re.compile(r'^\s*(?:§\s*)?(\d+)(?:\.([\w.-]+?))?((?:\([^()\s]+\))*)\s*$')
_MARKER_RE = re.compile(r'\(([^()\s]+)\)')


def parse_citation(citation: str) -> Optional[List[str]]:
    """
    Turn a citation into a label.

    "433.12(a)(2)" gives ["433", "12", "a", "2"], "§ 433.12" gives
    ["433", "12"] and "433" gives ["433"]. Returns None when the text is not
    a citation.
    """
    match = _CITATION_RE.match(citation)
    if not match:
        return None
    part, section, markers = match.groups()
    label = [part]
    if section:
        label.extend(section.split("."))
    label.extend(_MARKER_RE.findall(markers))
    return label


def find_node(tree: Optional[Dict[str, Any]], label: List[str]) -> Optional[Dict[str, Any]]:
    """Depth-first search for the first structural node labeled exactly ``label``."""
    if tree is None:
        return None
    if tree.get("label") == label and tree.get("node_type") != "node":
        return tree
    for child in tree.get("children") or []:
        found = find_node(child, label)
        if found is not None:
            return found
    return None
