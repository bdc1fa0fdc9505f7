"""
Shared Pydantic building blocks.

Result envelope, camelCase base model and the reusable constrained field
types used by every entity schema.
"""

from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    NonNegativeFloat,
    NonNegativeInt,
    StringConstraints,
)
from pydantic.alias_generators import to_camel


class ActionResult(BaseModel):
    """Uniform envelope returned by every action."""

    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[str] = None


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value: Any) -> Any:
    # HTML forms submit empty inputs as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
OptionalStr = Annotated[
    Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]],
    BeforeValidator(blank_to_none),
]
OptionalCount = Annotated[Optional[NonNegativeInt], BeforeValidator(blank_to_none)]
OptionalAmount = Annotated[Optional[NonNegativeFloat], BeforeValidator(blank_to_none)]


class DepartmentRef(CamelModel):
    """Minimal department representation joined onto records."""

    id: str
    name: str
