from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from typing import List

from regtree.exceptions import DocumentDecodeError
from regtree.models.nodes import Document, Part, Section, SubjectGroup, Subpart
from regtree.schemas.part import PartSummary
from regtree.services.converter import load_document_bytes, select_part
from regtree.services.emitter import render
from regtree.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/parts", tags=["parts"])


def count_sections(children) -> int:
    count = 0
    for child in children:
        if isinstance(child, Section):
            count += 1
        elif isinstance(child, (Subpart, SubjectGroup)):
            count += count_sections(child.children)
    return count


def summarize(part: Part) -> PartSummary:
    return PartSummary(
        number=part.number,
        title=part.header,
        label=part.label,
        section_count=count_sections(part.children),
    )


async def _read_document(request: Request) -> Document:
    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Request body must be a CFR XML volume")
    try:
        return load_document_bytes(body)
    except DocumentDecodeError as e:
        logger.error(str(e))
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=List[PartSummary])
async def list_parts(request: Request):
    """
    List the parts of the CFR volume sent as the request body.
    """
    document = await _read_document(request)
    return [summarize(part) for part in document.parts()]


@router.post("/{part_id}")
async def convert_part(part_id: str, request: Request):
    """
    Convert the CFR volume sent as the request body and return the tree of
    the first part whose header contains part_id, or null.
    """
    document = await _read_document(request)
    return JSONResponse(content=render(select_part(document, part_id)))
