from typing import List, Sequence

from regtree.models.nodes import (
    Document,
    Generic,
    Paragraph,
    Part,
    Section,
    SubjectGroup,
    Subpart,
)
from regtree.services.paragraphs import label_paragraphs
from regtree.utils.logging import get_logger

logger = get_logger(__name__)


def section_label(number: str) -> List[str]:
    """
    Split a section number into its label.

    "§ 433.12" gives ["433", "12"]. Leading section signs and surrounding
    whitespace are dropped; any further dots are kept as extra components.
    """
    reference = number.strip().lstrip("§").strip()
    if not reference:
        return []
    return reference.split(".")


def _label_generic(node: Generic, label: Sequence[str]):
    node.label = list(label)
    for child in node.children:
        _label_generic(child, label)


def _label_children(children, label: Sequence[str]):
    """Label the children of a container whose own label is ``label``."""
    label_paragraphs([child for child in children if isinstance(child, Paragraph)], label)
    for child in children:
        if isinstance(child, Subpart):
            label_subpart(child, label)
        elif isinstance(child, SubjectGroup):
            label_subject_group(child, label)
        elif isinstance(child, Section):
            label_section(child, label)
        elif isinstance(child, Generic):
            _label_generic(child, label)


def label_section(section: Section, parent_label: Sequence[str]):
    # The first component is already the part number
    section.label = section_label(section.number) or list(parent_label)
    _label_children(section.children, section.label)


def label_subject_group(group: SubjectGroup, parent_label: Sequence[str]):
    group.label = list(parent_label)
    _label_children(group.children, group.label)


def label_subpart(subpart: Subpart, parent_label: Sequence[str]):
    subpart.label = list(parent_label) + [subpart.header]
    _label_children(subpart.children, subpart.label)


def label_part(part: Part):
    part.label = [part.number]
    _label_children(part.children, part.label)


def propagate_labels(document: Document) -> Document:
    """Label every node below each part of ``document``, in document order."""
    count = 0
    for part in document.parts():
        label_part(part)
        count += 1
    logger.debug(f"Labeled {count} parts")
    return document
