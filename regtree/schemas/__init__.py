from regtree.schemas.part import PartSummary

__all__ = [
    "PartSummary",
]
