"""Shared configuration for API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema serialized with camelCase keys and accepting either casing on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(APIModel):
    """Acknowledgement for mutations without a resource body."""

    success: bool = True
