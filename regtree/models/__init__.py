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

# Export the node types so they can be imported from regtree.models
__all__ = [
    "Chapter",
    "Document",
    "Generic",
    "Node",
    "Paragraph",
    "Part",
    "QName",
    "Section",
    "SubjectGroup",
    "Subchapter",
    "Subpart",
    "Title",
]
