import re
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect


def make_json_serializable(data: Any) -> Any:
    """
    Recursively convert non-serializable values (Enum, Decimal, datetime) to JSON-serializable formats.
    """
    if isinstance(data, dict):
        return {str(k): make_json_serializable(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [make_json_serializable(v) for v in data]
    elif isinstance(data, Enum):
        return data.value
    elif isinstance(data, Decimal):
        return float(data)
    elif isinstance(data, (datetime, date)):
        return data.isoformat()
    return data


def serialize_record(obj: Any) -> Dict[str, Any]:
    """
    Convert an ORM row to a camelCase dict of its columns.

    The owning department, when loaded, is joined in as ``{id, name}``.
    """
    state = inspect(obj)
    record = {
        to_camel(attr.key): getattr(obj, attr.key)
        for attr in state.mapper.column_attrs
    }
    if "department" in state.mapper.relationships and "department" not in state.unloaded:
        department = obj.department
        record["department"] = (
            {"id": department.id, "name": department.name} if department is not None else None
        )
    return make_json_serializable(record)


def slugify(value: str) -> str:
    """Lower-case, hyphen separated identifier derived from a display name."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug[:64] or "department"


def to_schema(schema: Type[BaseModel]) -> Callable[[Any], Any]:
    """Serializer rendering an ORM object (or a list of them) through a camelCase read schema."""

    def serialize(value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [serialize(item) for item in value]
        return schema.model_validate(value).model_dump(by_alias=True)

    return serialize
