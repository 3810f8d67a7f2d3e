"""Pydantic models for record update requests."""

from pydantic import BaseModel, ConfigDict, Field


class UpdateRecordRequest(BaseModel):
    """Validation model for the update path parameters."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        pattern=r"^[^/]+$",
        description="Identifier of the record to update",
    )
