"""
Equipment API endpoints.

CRUD for department equipment, a cross-department listing, and CSV bulk
import with its downloadable template.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.config import settings
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.core.logging import logger
from agri_inventory.db.session import get_db
from agri_inventory.models.enums import EquipmentStatus
from agri_inventory.schemas.equipment import EquipmentDetail, EquipmentRead
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.bulk_import import BulkImportService, generate_csv_template, import_summary
from agri_inventory.services.equipment import EquipmentService
from agri_inventory.utils import to_schema

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_equipment(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Create a piece of equipment.

    Args:
        payload: ``{name, type, status, purchaseDate, imageUrl, departmentId}``
        db: Database session
        session: Caller's session

    Returns:
        Envelope with the created equipment
    """
    result = await run_action(
        EquipmentService.create(db, session, payload),
        failure_message="An error occurred while creating equipment",
        success_message="Equipment created successfully",
        serializer=to_schema(EquipmentRead),
    )
    return envelope_response(result, status.HTTP_201_CREATED)


@router.get("/")
async def list_equipment(
    status_filter: Optional[EquipmentStatus] = Query(None, alias="status"),
    equipment_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = Query(None),
    department_id: Optional[str] = Query(None, alias="departmentId"),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Equipment in the caller's scope, newest first."""
    result = await run_action(
        EquipmentService.get_all(db, session, status_filter, equipment_type, search, department_id),
        failure_message="An error occurred while fetching equipment",
        serializer=to_schema(EquipmentRead),
    )
    return envelope_response(result)


@router.get("/all")
async def list_all_departments_equipment(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        EquipmentService.get_all_departments(db, session),
        failure_message="An error occurred while fetching equipment",
        serializer=to_schema(EquipmentRead),
    )
    return envelope_response(result)


@router.get("/import/template")
async def download_import_template() -> Response:
    """CSV template for bulk import."""
    return Response(
        content=generate_csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="equipment-import-template.csv"'},
    )


@router.post("/import")
async def import_equipment(
    file: UploadFile = File(...),
    department_id: Optional[str] = Form(None, alias="departmentId"),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Bulk import equipment from a CSV upload.

    Rows that fail validation are reported individually; the rest are
    imported.
    """
    # One byte past the limit is enough for the size check to reject it
    content = await file.read(settings.inventory.max_import_bytes + 1)
    logger.info(f"CSV import upload: {file.filename} ({len(content)} bytes read)")

    result = await run_action(
        BulkImportService.import_equipment(
            db, session, file.filename, file.content_type, content, department_id
        ),
        failure_message="An error occurred during bulk import",
    )
    if result.success:
        result.message = import_summary(result.data)
    return envelope_response(result)


@router.get("/{equipment_id}")
async def get_equipment(
    equipment_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Equipment with its department and maintenance history."""
    result = await run_action(
        EquipmentService.get_by_id(db, session, equipment_id),
        failure_message="An error occurred while fetching equipment",
        serializer=to_schema(EquipmentDetail),
    )
    return envelope_response(result)


@router.put("/{equipment_id}")
async def update_equipment(
    equipment_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        EquipmentService.update(db, session, equipment_id, payload),
        failure_message="An error occurred while updating equipment",
        success_message="Equipment updated successfully",
        serializer=to_schema(EquipmentRead),
    )
    return envelope_response(result)


@router.delete("/{equipment_id}")
async def delete_equipment(
    equipment_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        EquipmentService.delete(db, session, equipment_id),
        failure_message="An error occurred while deleting equipment",
        success_message="Equipment deleted successfully",
        serializer=lambda deleted_id: {"id": deleted_id},
    )
    return envelope_response(result)
