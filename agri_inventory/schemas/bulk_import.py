"""
Pydantic schemas for CSV bulk import results.
"""

from typing import Dict, List

from agri_inventory.schemas.common import CamelModel


class ImportRowError(CamelModel):
    """Why one CSV row was rejected. ``row`` counts the header as row 1."""

    row: int
    message: str
    fields: Dict[str, List[str]] = {}


class ImportResult(CamelModel):
    total_rows: int
    imported: int
    failed: int
    errors: List[ImportRowError]
