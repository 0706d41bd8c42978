"""
Paragraph label inference.

CFR paragraphs sit flat inside a section; their nesting is only visible in
the marker that opens each one. Markers come in four classes, outermost
first::

    0  (a), (b) ... (z), (aa)     lowercase alpha
    1  (1), (2) ... (12)          arabic digits
    2  (i), (ii), (iv), (ix)      lowercase roman
    3  (A), (B)                   uppercase alpha

A token is assigned the highest-indexed class it matches, so ``(i)``,
``(v)`` and friends are always read as roman numerals. An outer alpha list
that genuinely reaches ``(i)`` is therefore mis-leveled; nothing here tries
to recover the alpha reading from the surrounding paragraphs.
"""

import re
from typing import List, Optional, Sequence

from regtree.models.nodes import Paragraph

ALPHA = 0
ARABIC = 1
ROMAN = 2
UPPER = 3

MARKER_CLASSES = [
    (ALPHA, re.compile(r"[a-z]+")),
    (ARABIC, re.compile(r"\d+")),
    (ROMAN, re.compile(r"ix|iv|v?i{0,3}")),
    (UPPER, re.compile(r"[A-Z]+")),
]

_MARKER_RE = re.compile(r"\(([^()\s]+)\)")


def marker_level(token: str) -> Optional[int]:
    """Level of a single marker token, or None when it matches no class."""
    level = None
    for index, pattern in MARKER_CLASSES:
        if token and pattern.fullmatch(token):
            level = index
    return level


def own_suffix(text: str) -> List[str]:
    """
    Marker tokens opening a paragraph, in the order written.

    "(a)(1) The State..." gives ["a", "1"]. The chain must start at the very
    first character and stops at the first token that is not a marker.
    """
    tokens = []
    position = 0
    while True:
        match = _MARKER_RE.match(text, position)
        if not match or marker_level(match.group(1)) is None:
            break
        tokens.append(match.group(1))
        position = match.end()
    return tokens


def paragraph_level(suffix: Sequence[str]) -> int:
    """Level of a paragraph from its own suffix; unmarked paragraphs sit at 0."""
    if not suffix:
        return ALPHA
    return marker_level(suffix[0])


def relative_labels(texts: Sequence[str]) -> List[List[str]]:
    """
    Resolve the labels of sibling paragraphs relative to their container.

    Paragraphs are resolved left to right and each result is kept, so a
    paragraph only looks up the labels of the siblings before it.
    """
    resolved = []
    levels = []
    for text in texts:
        suffix = own_suffix(text)
        level = paragraph_level(suffix)
        base = []
        if level > ALPHA:
            for index in range(len(resolved) - 1, -1, -1):
                if levels[index] < level:
                    base = list(resolved[index])
                    # A trailing marker of our own class belongs to a peer
                    if base and marker_level(base[-1]) == level:
                        base.pop()
                    break
        resolved.append(base + suffix)
        levels.append(level)
    return resolved


def label_paragraphs(paragraphs: Sequence[Paragraph], prefix: Sequence[str]):
    """Set the full label of each paragraph under a container labeled ``prefix``."""
    for paragraph, relative in zip(paragraphs, relative_labels([p.text for p in paragraphs])):
        paragraph.label = list(prefix) + relative
