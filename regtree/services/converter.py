"""
Conversion of a whole volume: decode, label, select a part and emit it.
"""

from typing import Optional, Union

from regtree.models.nodes import Document, Part
from regtree.services.decoder import decode_file, decode_string
from regtree.services.emitter import DEFAULT_INDENT, emit_json
from regtree.services.labels import propagate_labels
from regtree.utils.logging import get_logger

logger = get_logger(__name__)


def load_document(path) -> Document:
    """Decode the volume at ``path`` and label every part in it."""
    return propagate_labels(decode_file(path))


def load_document_bytes(data: Union[str, bytes], name: str = "<upload>") -> Document:
    return propagate_labels(decode_string(data, name=name))


def select_part(document: Document, part_id: str) -> Optional[Part]:
    part = document.select_part(part_id)
    if part is None:
        logger.warning(f"No part matching {part_id!r}")
    return part


def convert_file(path, part_id: str, indent: int = DEFAULT_INDENT) -> str:
    """Return the JSON for the part of the volume at ``path`` matching ``part_id``."""
    return emit_json(select_part(load_document(path), part_id), indent=indent)


def convert_bytes(data: Union[str, bytes], part_id: str, indent: int = DEFAULT_INDENT) -> str:
    return emit_json(select_part(load_document_bytes(data), part_id), indent=indent)
