"""Pydantic models for record delete requests."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteRecordRequest(BaseModel):
    """Validation model for the delete path parameters."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the record to delete",
    )
