"""
Payload validation helpers.

Services receive raw request payloads and validate them here so that
rejections carry a per-field error map keyed by the wire (camelCase) name.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Type

from pydantic import BaseModel, Field, ValidationError, create_model

from agri_inventory.core.errors import FieldErrors, ValidationFailedError

FORM_ERROR_KEY = "_form"


def field_errors_from(exc: ValidationError) -> FieldErrors:
    """Flatten a pydantic ValidationError into ``{field: [messages]}``."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else FORM_ERROR_KEY
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(key, []).append(message)
    return errors


@lru_cache(maxsize=None)
def partial_model(schema: Type[BaseModel]) -> Type[BaseModel]:
    """
    Derive a patch variant of ``schema``.

    Every field becomes omittable, but a supplied value is still checked
    against the original type and constraints, including explicit nulls
    for required fields.
    """
    fields: Dict[str, Any] = {}
    for name, info in schema.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[name] = (annotation, Field(default=None, alias=info.alias))
    return create_model(f"{schema.__name__}Patch", __base__=schema, **fields)


def validate_payload(
    schema: Type[BaseModel],
    data: Any,
    *,
    partial: bool = False,
) -> Dict[str, Any]:
    """
    Validate a raw payload against a schema.

    Args:
        schema: Pydantic model describing the payload
        data: Raw payload (usually decoded JSON)
        partial: Validate only the supplied keys

    Returns:
        Validated values keyed by attribute name. Partial validation
        returns only the supplied keys.

    Raises:
        ValidationFailedError: With the per-field error map
    """
    if not isinstance(data, Mapping):
        raise ValidationFailedError({FORM_ERROR_KEY: ["Expected an object"]})

    model = partial_model(schema) if partial else schema
    try:
        instance = model.model_validate(dict(data))
    except ValidationError as exc:
        raise ValidationFailedError(field_errors_from(exc)) from exc

    return instance.model_dump(exclude_unset=partial)
