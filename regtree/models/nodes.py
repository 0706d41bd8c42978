"""
Regulation tree nodes.

The tree is a flat set of node classes rather than a hierarchy: every node
carries ``label``, ``children`` and a constant ``node_type``, and knows how to
``render()`` itself into the plain dict the JSON emitter writes out.
Nodes never hold a reference to their parent; the label passes hand the
parent label down as an argument instead.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass
class QName:
    """Qualified XML element name"""
    local: str
    namespace: str = ""

    def render(self) -> Dict[str, str]:
        return {"Space": self.namespace, "Local": self.local}


@dataclass
class Generic:
    """Any element without a typed builder, kept losslessly"""
    name: QName
    attributes: Dict[str, str] = field(default_factory=dict)
    content: List[str] = field(default_factory=list)
    children: List["Generic"] = field(default_factory=list)
    label: List[str] = field(default_factory=list)

    node_type = "node"

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "attributes": dict(self.attributes),
            "content": list(self.content),
            "children": [child.render() for child in self.children],
        }


@dataclass
class Paragraph:
    """A ``P`` element; ``text`` is the raw inner content, markup included"""
    name: QName
    text: str = ""
    label: List[str] = field(default_factory=list)

    node_type = "reg_text"

    @property
    def children(self) -> List[Any]:
        return []

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "text": self.text,
            "children": [],
        }


@dataclass
class Section:
    name: QName
    number: str = ""
    subject: str = ""
    children: List[Union[Paragraph, Generic]] = field(default_factory=list)
    label: List[str] = field(default_factory=list)

    node_type = "section"

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "number": self.number,
            "subject": self.subject,
            "children": [child.render() for child in self.children],
        }


@dataclass
class SubjectGroup:
    """An undesignated heading grouping sections; it adds nothing to labels"""
    name: QName
    header: str = ""
    children: List[Union[Section, Generic]] = field(default_factory=list)
    label: List[str] = field(default_factory=list)

    node_type = "subjgrp"

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "header": self.header,
            "children": [child.render() for child in self.children],
        }


@dataclass
class Subpart:
    name: QName
    header: str = ""
    children: List[Union[Section, Paragraph, Generic]] = field(default_factory=list)
    label: List[str] = field(default_factory=list)

    node_type = "subpart"

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "header": self.header,
            "children": [child.render() for child in self.children],
        }


@dataclass
class Part:
    """
    A CFR part.

    ``header`` is the ``HD`` text (e.g. "PART 433—STATE FISCAL ADMINISTRATION")
    and is emitted as ``title``; ``number`` is the numeric id parsed from it.
    """
    name: QName
    header: str = ""
    number: str = ""
    text: str = ""
    children: List[Union[Subpart, SubjectGroup, Section, Paragraph, Generic]] = field(default_factory=list)
    label: List[str] = field(default_factory=list)

    node_type = "part"

    def render(self) -> Dict[str, Any]:
        return {
            "meta": self.name.render(),
            "label": list(self.label),
            "node_type": self.node_type,
            "title": self.header,
            "text": self.text,
            "children": [child.render() for child in self.children],
        }


Node = Union[Part, Subpart, SubjectGroup, Section, Paragraph, Generic]


@dataclass
class Subchapter:
    header: str = ""
    children: List[Part] = field(default_factory=list)


@dataclass
class Chapter:
    children: List[Subchapter] = field(default_factory=list)


@dataclass
class Title:
    children: List[Chapter] = field(default_factory=list)


@dataclass
class Document:
    """Root of a decoded CFR volume (``CFRDOC``)"""
    title: Optional[Title] = None

    def parts(self) -> Iterator[Part]:
        """Yield every part in document order."""
        if self.title is None:
            return
        for chapter in self.title.children:
            for subchapter in chapter.children:
                yield from subchapter.children

    def select_part(self, part_id: str) -> Optional[Part]:
        """Return the first part whose header contains ``part_id``, or None."""
        for part in self.parts():
            if part_id in part.header:
                return part
        return None
