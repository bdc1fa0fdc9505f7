"""
CSV bulk import of equipment.

Every data row is normalized and validated on its own; a failing row is
reported with its row number and never stops the rows after it. Valid rows
are inserted together in one transaction.
"""

import csv
import io
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.config import settings
from agri_inventory.core.errors import ValidationFailedError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import require_session, scoped_department_id
from agri_inventory.models.enums import EquipmentStatus, Role
from agri_inventory.models.equipment import Equipment
from agri_inventory.schemas.bulk_import import ImportResult, ImportRowError
from agri_inventory.schemas.equipment import EquipmentBase, check_purchase_date
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.services.department import DepartmentService
from agri_inventory.services.equipment import INVENTORY_PATHS

ALLOWED_CONTENT_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}

HEADER_ALIASES = {
    "equipment name": "name",
    "name": "name",
    "equipment type": "type",
    "type": "type",
    "status": "status",
    "equipment status": "status",
    "purchase date": "purchaseDate",
    "purchasedate": "purchaseDate",
    "date purchased": "purchaseDate",
    "image url": "imageUrl",
    "imageurl": "imageUrl",
    "image": "imageUrl",
}
REQUIRED_COLUMNS = ("name", "type", "purchaseDate")

STATUS_SYNONYMS = {
    "available": EquipmentStatus.AVAILABLE,
    "active": EquipmentStatus.AVAILABLE,
    "ready": EquipmentStatus.AVAILABLE,
    "inuse": EquipmentStatus.IN_USE,
    "used": EquipmentStatus.IN_USE,
    "occupied": EquipmentStatus.IN_USE,
    "busy": EquipmentStatus.IN_USE,
    "needsrepair": EquipmentStatus.NEEDS_REPAIR,
    "repair": EquipmentStatus.NEEDS_REPAIR,
    "broken": EquipmentStatus.NEEDS_REPAIR,
    "maintenance": EquipmentStatus.NEEDS_REPAIR,
    "discarded": EquipmentStatus.DISCARDED,
    "disposed": EquipmentStatus.DISCARDED,
    "retired": EquipmentStatus.DISCARDED,
    "scrapped": EquipmentStatus.DISCARDED,
}

# Day-first before month-first: the university writes 03/04/2023 as 3 April
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%m/%d/%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)

TEMPLATE_HEADERS = ["name", "type", "status", "purchaseDate", "imageUrl"]
TEMPLATE_ROWS = [
    ["Tractor Model X", "Heavy Machinery", "AVAILABLE", "2023-01-15", "https://example.com/tractor.jpg"],
    ["Irrigation Pump", "Water Equipment", "IN_USE", "2022-06-20", ""],
    ["Harvester Combine", "Heavy Machinery", "NEEDS_REPAIR", "2021-03-10", "https://example.com/harvester.jpg"],
]


def normalize_header(header: Optional[str]) -> str:
    normalized = (header or "").strip().lower()
    return HEADER_ALIASES.get(normalized, normalized)


def normalize_status(value: Optional[str]) -> EquipmentStatus:
    """
    Map a free-text status onto EquipmentStatus.

    Blank means AVAILABLE. Comparison ignores case and anything that is not
    a letter, so "In Use", "in_use" and "IN-USE" are all IN_USE.

    Raises:
        ValueError: Unrecognized status
    """
    raw = (value or "").strip()
    if not raw:
        return EquipmentStatus.AVAILABLE
    key = "".join(ch for ch in raw.lower() if "a" <= ch <= "z")
    if key not in STATUS_SYNONYMS:
        raise ValueError(f"Invalid status: {raw}")
    return STATUS_SYNONYMS[key]


def parse_purchase_date(value: Optional[str]) -> date:
    """
    Parse a purchase date written in any of the accepted formats.

    Raises:
        ValueError: Missing, unparseable or out-of-range date
    """
    raw = (value or "").strip()
    if not raw:
        raise ValueError("Purchase date is required")

    parsed = None
    try:
        parsed = datetime.fromisoformat(raw).date()
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt).date()
                break
            except ValueError:
                continue
    if parsed is None:
        raise ValueError(f"Invalid date format: {raw}")

    return check_purchase_date(parsed)


@dataclass
class ParsedImport:
    """Outcome of parsing one CSV file."""

    total_rows: int = 0
    rows: List[Tuple[int, Dict[str, Any]]] = field(default_factory=list)
    errors: List[ImportRowError] = field(default_factory=list)


def _parse_row(raw: Dict[str, str]) -> Dict[str, Any]:
    """Normalize and validate one row; raises ValidationFailedError with the row's field map."""
    errors: Dict[str, List[str]] = {}
    values: Dict[str, Any] = {
        "name": (raw.get("name") or "").strip(),
        "type": (raw.get("type") or "").strip(),
        "imageUrl": (raw.get("imageUrl") or "").strip() or None,
    }

    try:
        values["status"] = normalize_status(raw.get("status"))
    except ValueError as exc:
        errors["status"] = [str(exc)]

    try:
        values["purchaseDate"] = parse_purchase_date(raw.get("purchaseDate"))
    except ValueError as exc:
        errors["purchaseDate"] = [str(exc)]

    try:
        validated = validate_payload(EquipmentBase, values)
    except ValidationFailedError as exc:
        for key, messages in exc.field_errors.items():
            errors.setdefault(key, messages)
        raise ValidationFailedError(errors) from exc

    if errors:
        raise ValidationFailedError(errors)
    return validated


def parse_equipment_csv(text: str) -> ParsedImport:
    """
    Parse CSV text into validated equipment rows and per-row errors.

    Row numbers count the header as row 1. Blank lines are skipped and
    unknown columns are ignored.

    Raises:
        ValidationFailedError: When the file itself is unusable
    """
    reader = csv.DictReader(io.StringIO(text))
    try:
        headers = reader.fieldnames
    except csv.Error as exc:
        raise ValidationFailedError({"file": [f"CSV parsing failed: {exc}"]}, "File parsing failed") from exc
    if not headers:
        raise ValidationFailedError({"file": ["File is empty"]}, "File parsing failed")

    reader.fieldnames = [normalize_header(header) for header in headers]
    missing = [column for column in REQUIRED_COLUMNS if column not in reader.fieldnames]
    if missing:
        raise ValidationFailedError(
            {"file": [f"Missing required column(s): {', '.join(missing)}"]},
            "File parsing failed",
        )

    parsed = ParsedImport()
    try:
        for raw in reader:
            if not any((value or "").strip() for value in raw.values() if isinstance(value, str)):
                continue
            parsed.total_rows += 1
            row_number = parsed.total_rows + 1
            try:
                parsed.rows.append((row_number, _parse_row(raw)))
            except ValidationFailedError as exc:
                parsed.errors.append(
                    ImportRowError(
                        row=row_number,
                        message="; ".join(message for messages in exc.field_errors.values() for message in messages),
                        fields=exc.field_errors,
                    )
                )
    except csv.Error as exc:
        raise ValidationFailedError({"file": [f"CSV parsing failed: {exc}"]}, "File parsing failed") from exc

    return parsed


def generate_csv_template() -> str:
    """CSV template with the canonical headers and a few sample rows."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    writer.writerows(TEMPLATE_ROWS)
    return buffer.getvalue()


def import_summary(result: Dict[str, Any]) -> str:
    if not result["failed"]:
        return f"Successfully imported {result['imported']} equipment records"
    return (
        f"Import completed with {result['imported']} successful "
        f"and {result['failed']} failed records"
    )


def _check_file(filename: Optional[str], content_type: Optional[str], content: bytes) -> str:
    name = (filename or "").lower()
    if (content_type or "").split(";")[0].strip() not in ALLOWED_CONTENT_TYPES and not name.endswith(".csv"):
        raise ValidationFailedError(
            {"file": ["Invalid file type. Only CSV files are allowed."]},
            "Invalid file type. Only CSV files are allowed.",
        )

    max_bytes = settings.inventory.max_import_bytes
    if len(content) > max_bytes:
        message = f"File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        raise ValidationFailedError({"file": [message]}, message)

    if not content.strip():
        raise ValidationFailedError({"file": ["File is empty"]}, "File is empty")

    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationFailedError({"file": ["File must be UTF-8 encoded text"]}, "File parsing failed") from exc


class BulkImportService:
    """Service class for CSV equipment import."""

    @staticmethod
    async def _target_department(db: AsyncSession, session: SessionUser, department_id: Optional[str]) -> str:
        if session.role != Role.ADMIN:
            return scoped_department_id(session)
        if not department_id:
            raise ValidationFailedError(
                {"departmentId": ["Department selection is required for admin users"]},
                "Department selection is required for admin users",
            )
        await DepartmentService.require(db, department_id, "Invalid department selected")
        return department_id

    @staticmethod
    async def import_equipment(
        db: AsyncSession,
        session: Optional[SessionUser],
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes,
        department_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Import equipment rows from an uploaded CSV file.

        Args:
            db: Database session
            session: Caller's session
            filename: Uploaded file name
            content_type: Uploaded file MIME type
            content: Raw file bytes
            department_id: Target department (required for admins, ignored for heads)

        Returns:
            ImportResult as a camelCase dict
        """
        session = require_session(session)
        target = await BulkImportService._target_department(db, session, department_id)
        text = _check_file(filename, content_type, content)

        parsed = parse_equipment_csv(text)
        equipment = [Equipment(**values, department_id=target) for _, values in parsed.rows]
        if equipment:
            db.add_all(equipment)
            await db.commit()
            await revalidate_paths(*INVENTORY_PATHS)

        result = ImportResult(
            total_rows=parsed.total_rows,
            imported=len(equipment),
            failed=len(parsed.errors),
            errors=parsed.errors,
        )
        logger.info(
            f"CSV import into {target} by {session.id}: "
            f"{result.imported} imported, {result.failed} failed of {result.total_rows}"
        )
        return result.model_dump(by_alias=True)
