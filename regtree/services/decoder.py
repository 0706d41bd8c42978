"""
Streaming decoder for CFR volumes.

The volume is read with lxml's ``iterparse`` as a stream of start/end events.
Each typed builder pulls the start events of its direct children from an
``EventStream`` and hands every child to the builder for its tag, so a
builder owns the decoding of its whole subtree and returns once it sees its
own end event. Elements are cleared as soon as their node is built, and
finished siblings are detached from their parent once the next sibling
ends, so memory stays bounded by the depth of the tree.
"""

import io
import re
from typing import Callable, Dict, Iterator, Optional, Union
from xml.sax.saxutils import escape

from lxml import etree

from regtree.exceptions import DocumentDecodeError, DocumentReadError
from regtree.models.nodes import (
    Chapter,
    Document,
    Generic,
    Node,
    Paragraph,
    Part,
    QName,
    Section,
    SubjectGroup,
    Subchapter,
    Subpart,
    Title,
)
from regtree.utils.logging import get_logger

logger = get_logger(__name__)

_PART_NUMBER_RE = re.compile(r"\d+")


class EventStream:
    """Pull-style access to an ``iterparse`` event iterator"""

    def __init__(self, events):
        self._events = iter(events)

    def children(self, parent) -> Iterator[etree._Element]:
        """
        Yield each direct child of ``parent`` as its start event arrives.

        The consumer must read the yielded child through to its end event
        (by building it, or with ``finish``) before asking for the next one.
        Iteration stops at the end event of ``parent``.
        """
        for event, elem in self._events:
            if event == "start":
                yield elem
            elif elem is parent:
                return

    def finish(self, elem):
        """Consume events up to and including the end of ``elem``."""
        for event, current in self._events:
            if event == "end" and current is elem:
                return

    def drain(self):
        for _ in self._events:
            pass


def local_name(elem) -> str:
    return etree.QName(elem).localname


def _qname(elem) -> QName:
    qname = etree.QName(elem)
    return QName(local=qname.localname, namespace=qname.namespace or "")


def _release(elem):
    # Tails belong to the parent's character data, keep them
    elem.clear(keep_tail=True)


def _prune(elem) -> list:
    """
    Detach the finished siblings before ``elem`` from their parent.

    Must be called once ``elem`` has ended, so every earlier sibling tail
    is complete. The tails are returned in document order because they
    leave the tree with their elements.
    """
    tails = []
    parent = elem.getparent()
    if parent is None:
        return tails
    while elem.getprevious() is not None:
        tails.append(parent[0].tail)
        del parent[0]
    return tails


def _skip(stream: EventStream, elem):
    stream.finish(elem)
    _release(elem)


def _leaf_text(stream: EventStream, elem) -> str:
    """Read a header-like element (HD, SECTNO, SUBJECT) and return its text."""
    stream.finish(elem)
    text = etree.tostring(elem, method="text", encoding="unicode", with_tail=False)
    _release(elem)
    return text


def _direct_text(elem, pruned=()) -> str:
    runs = [elem.text or ""]
    runs.extend(tail or "" for tail in pruned)
    runs.extend(child.tail or "" for child in elem)
    return "".join(runs)


def _char_runs(elem, pruned=()):
    runs = [elem.text]
    runs.extend(pruned)
    runs.extend(child.tail for child in elem)
    return [run for run in runs if run is not None]


def inner_xml(elem) -> str:
    """Serialize the content of ``elem`` without its own start and end tags."""
    pieces = [escape(elem.text or "")]
    for child in elem:
        pieces.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(pieces)


def part_number(header: str) -> str:
    """
    Numeric id of a part taken from its header.

    "PART 433—STATE FISCAL ADMINISTRATION" gives "433". A header without
    digits is returned stripped.
    """
    match = _PART_NUMBER_RE.search(header)
    if match:
        return match.group(0)
    return header.strip()


# Typed builders


def build_generic(stream: EventStream, elem) -> Generic:
    node = Generic(name=_qname(elem), attributes=dict(elem.attrib))
    pruned = []
    for child in stream.children(elem):
        node.children.append(build_generic(stream, child))
        pruned.extend(_prune(child))
    node.content = _char_runs(elem, pruned)
    _release(elem)
    return node


def build_paragraph(stream: EventStream, elem) -> Paragraph:
    stream.finish(elem)
    node = Paragraph(name=_qname(elem), text=inner_xml(elem))
    _release(elem)
    return node


def build_section(stream: EventStream, elem) -> Section:
    section = Section(name=_qname(elem))
    seen = set()
    for child in stream.children(elem):
        tag = local_name(child)
        if tag == "SECTNO" and tag not in seen:
            section.number = _leaf_text(stream, child)
            seen.add(tag)
        elif tag == "SUBJECT" and tag not in seen:
            section.subject = _leaf_text(stream, child)
            seen.add(tag)
        elif tag == "P":
            section.children.append(build_paragraph(stream, child))
        else:
            section.children.append(build_generic(stream, child))
        _prune(child)
    _release(elem)
    logger.trace(f"Decoded section {section.number!r} with {len(section.children)} children")
    return section


def build_subject_group(stream: EventStream, elem) -> SubjectGroup:
    group = SubjectGroup(name=_qname(elem))
    has_header = False
    for child in stream.children(elem):
        tag = local_name(child)
        if tag == "HD" and not has_header:
            group.header = _leaf_text(stream, child)
            has_header = True
        elif tag == "SECTION":
            group.children.append(build_section(stream, child))
        else:
            group.children.append(build_generic(stream, child))
        _prune(child)
    _release(elem)
    return group


def build_subpart(stream: EventStream, elem) -> Subpart:
    subpart = Subpart(name=_qname(elem))
    has_header = False
    for child in stream.children(elem):
        if local_name(child) == "HD" and not has_header:
            subpart.header = _leaf_text(stream, child)
            has_header = True
        else:
            subpart.children.append(dispatch(stream, child))
        _prune(child)
    _release(elem)
    return subpart


def build_part(stream: EventStream, elem) -> Part:
    part = Part(name=_qname(elem))
    has_header = False
    pruned = []
    for child in stream.children(elem):
        if local_name(child) == "HD" and not has_header:
            part.header = _leaf_text(stream, child)
            has_header = True
        else:
            part.children.append(dispatch(stream, child))
        pruned.extend(_prune(child))
    part.number = part_number(part.header)
    part.text = _direct_text(elem, pruned).strip()
    _release(elem)
    logger.debug(f"Decoded part {part.number} ({part.header!r}) with {len(part.children)} children")
    return part


CONTAINER_BUILDERS: Dict[str, Callable[[EventStream, etree._Element], Node]] = {
    "SUBPART": build_subpart,
    "SUBJGRP": build_subject_group,
    "SECTION": build_section,
    "P": build_paragraph,
}


def dispatch(stream: EventStream, elem) -> Node:
    """Build a child of a Part or Subpart with the builder for its tag."""
    tag = local_name(elem)
    builder = CONTAINER_BUILDERS.get(tag, build_generic)
    logger.trace(f"Dispatching <{tag}> to {builder.__name__}")
    return builder(stream, elem)


# Containers above the part level keep only the recognized path


def _build_subchapter(stream: EventStream, elem) -> Subchapter:
    subchapter = Subchapter()
    has_header = False
    for child in stream.children(elem):
        tag = local_name(child)
        if tag == "HD" and not has_header:
            subchapter.header = _leaf_text(stream, child)
            has_header = True
        elif tag == "PART":
            subchapter.children.append(build_part(stream, child))
        else:
            _skip(stream, child)
        _prune(child)
    _release(elem)
    return subchapter


def _build_chapter(stream: EventStream, elem) -> Chapter:
    chapter = Chapter()
    for child in stream.children(elem):
        if local_name(child) == "SUBCHAP":
            chapter.children.append(_build_subchapter(stream, child))
        else:
            _skip(stream, child)
        _prune(child)
    _release(elem)
    return chapter


def _build_title(stream: EventStream, elem, title: Title) -> Title:
    for child in stream.children(elem):
        if local_name(child) == "CHAPTER":
            title.children.append(_build_chapter(stream, child))
        else:
            _skip(stream, child)
        _prune(child)
    _release(elem)
    return title


def _build_document(stream: EventStream, root) -> Document:
    document = Document()
    for child in stream.children(root):
        if local_name(child) == "TITLE":
            # Later TITLE elements add their chapters to the first one
            document.title = _build_title(stream, child, document.title or Title())
        else:
            _skip(stream, child)
        _prune(child)
    return document


def decode_document(source, name: Optional[str] = None) -> Document:
    """
    Decode a CFR volume from a path or binary file object.

    Raises:
        DocumentDecodeError: the input is not well-formed XML or its root
            element is not CFRDOC
    """
    name = name or str(source)
    # Entities stay unexpanded and nothing is fetched
    events = etree.iterparse(
        source,
        events=("start", "end"),
        huge_tree=True,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
    )
    stream = EventStream(events)
    try:
        event, root = next(events)
        if local_name(root) != "CFRDOC":
            raise DocumentDecodeError(name, f"expected root element CFRDOC, found {local_name(root)}")
        document = _build_document(stream, root)
        # Surface anything malformed after the root element
        stream.drain()
    except StopIteration:
        raise DocumentDecodeError(name, "document is empty")
    except etree.XMLSyntaxError as e:
        raise DocumentDecodeError(name, e) from e

    logger.debug(f"Decoded {name}: {sum(1 for _ in document.parts())} parts")
    return document


def decode_file(path) -> Document:
    """Decode the volume at ``path``; the file is closed on every exit path."""
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise DocumentReadError(path, e) from e
    with handle:
        try:
            return decode_document(handle, name=str(path))
        except OSError as e:
            raise DocumentReadError(path, e) from e


def decode_string(xml: Union[str, bytes], name: str = "<string>") -> Document:
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    return decode_document(io.BytesIO(xml), name=name)
