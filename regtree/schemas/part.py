from pydantic import BaseModel, Field
from typing import List


class PartSummary(BaseModel):
    """One part found in an uploaded volume"""
    number: str = Field(..., description="Numeric id parsed from the part header, e.g. 433")
    title: str = Field(..., description="Part header text")
    label: List[str]
    section_count: int = Field(..., description="Sections in the part, including those inside subparts and subject groups")
